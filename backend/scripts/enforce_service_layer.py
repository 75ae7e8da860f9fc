"""
Engineering audit: Enforce service layer pattern.
Scans code and fails if Seizure model writes are detected outside
apps/seizures/services.py. Tests, migrations and this script are exempt.
"""

import sys
from pathlib import Path

FORBIDDEN_PATTERNS = [
    "Seizure.objects.create(",
    "Seizure.objects.update(",
    "Seizure.objects.bulk_create(",
    "Seizure.objects.update_or_create(",
    "Seizure.objects.get_or_create(",
    "seizure.save(",
    "seizure.delete(",
]

ALLOWED_PATH = "apps/seizures/services.py"
EXEMPT_PARTS = ("tests", "migrations", "scripts", "__pycache__", ".venv")


def scan_file(filepath):
    """Scan Python file for forbidden patterns."""
    if ALLOWED_PATH in filepath.as_posix():
        return []

    issues = []
    content = filepath.read_text(encoding="utf-8")
    for lineno, line in enumerate(content.splitlines(), start=1):
        for pattern in FORBIDDEN_PATTERNS:
            if pattern in line:
                issues.append(f"{filepath}:{lineno}: Found {pattern}")
    return issues


def main():
    backend = Path(__file__).resolve().parent.parent
    all_issues = []

    for pyfile in backend.rglob("*.py"):
        if any(part in pyfile.parts for part in EXEMPT_PARTS):
            continue
        all_issues.extend(scan_file(pyfile))

    if all_issues:
        print("ERROR: Direct Seizure writes detected outside services.py:")
        for issue in all_issues:
            print(f"  {issue}")
        sys.exit(1)

    print("OK: No direct Seizure writes outside service layer")


if __name__ == "__main__":
    main()
