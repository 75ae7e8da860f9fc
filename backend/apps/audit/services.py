"""
Audit service - creates immutable audit log entries.

All audit entries are append-only. No updates or deletions.
"""

from django.db.models import Q

from core.exceptions import NotFoundError, ValidationError
from core.middleware import get_current_request_id
from apps.audit.models import AuditLog


def create_audit_entry(action, actor_id, details="", seizure_id=None):
    """
    Create an audit log entry.

    Must be called inside the caller's transaction so the audit row and the
    state change it records commit or roll back together.

    Args:
        action: Action kind (e.g. 'EXIT_VALIDATION')
        actor_id: Identifier of the user performing the action (required)
        details: Human-readable description
        seizure_id: Identifier of the affected seizure (optional)

    Returns:
        AuditLog: Created audit log entry
    """
    from apps.users.models import User

    if not action:
        raise ValidationError("Audit action must be non-empty")

    try:
        actor = User.objects.get(id=actor_id)
    except User.DoesNotExist:
        raise NotFoundError(f"User {actor_id} does not exist")

    return AuditLog.objects.create(
        action=action,
        actor=actor,
        details=details or "",
        seizure_id=seizure_id,
        request_id=get_current_request_id(),
    )


def filter_audit_entries(
    queryset=None,
    user=None,
    action=None,
    seizure_id=None,
    from_date=None,
    to_date=None,
):
    """
    Apply the audit log filters shared by the list and export endpoints.

    ``user`` matches first name, last name or e-mail (case-insensitive
    substring); ``action`` is a case-insensitive substring match.
    """
    if queryset is None:
        queryset = AuditLog.objects.all()

    if user and user.strip():
        term = user.strip()
        queryset = queryset.filter(
            Q(actor__first_name__icontains=term)
            | Q(actor__last_name__icontains=term)
            | Q(actor__email__icontains=term)
        )

    if action and action.strip():
        queryset = queryset.filter(action__icontains=action.strip())

    if seizure_id:
        queryset = queryset.filter(seizure_id=seizure_id)

    if from_date:
        queryset = queryset.filter(occurred_at__gte=from_date)

    if to_date:
        queryset = queryset.filter(occurred_at__lte=to_date)

    return queryset.select_related("actor", "seizure").order_by("-occurred_at")
