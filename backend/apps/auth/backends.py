"""
Authentication backend for accounts imported with legacy password storage.

Some accounts were provisioned with a raw bcrypt hash or, worse, a
plain-text password. Django's hashers cannot identify either format, so
ModelBackend rejects them. When ALLOW_LEGACY_PASSWORDS is enabled this
backend verifies such a password once, re-hashes it with the default
hasher and records the migration. When the flag is off it does nothing.
"""

import hmac
import logging

import bcrypt
from django.conf import settings
from django.contrib.auth.backends import ModelBackend
from django.contrib.auth.hashers import identify_hasher, is_password_usable
from django.db import transaction

from core.middleware import get_current_request_id

logger = logging.getLogger(__name__)

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def is_legacy_hash(encoded):
    """True when Django cannot identify the stored password format."""
    if not encoded or not is_password_usable(encoded):
        return False
    try:
        identify_hasher(encoded)
    except ValueError:
        return True
    return False


def check_legacy_password(password, encoded):
    """Verify ``password`` against a raw bcrypt hash or a plain-text value."""
    if encoded.startswith(BCRYPT_PREFIXES):
        try:
            return bcrypt.checkpw(password.encode("utf-8"), encoded.encode("utf-8"))
        except ValueError:
            # Malformed salt
            return False

    return hmac.compare_digest(password.encode("utf-8"), encoded.encode("utf-8"))


class LegacyPasswordBackend(ModelBackend):
    """Accept legacy passwords once, then migrate them to a Django hash."""

    def authenticate(self, request, username=None, password=None, **kwargs):
        if not getattr(settings, "ALLOW_LEGACY_PASSWORDS", False):
            return None

        from apps.users.models import User

        if username is None:
            username = kwargs.get(User.USERNAME_FIELD)
        if not username or password is None:
            return None

        try:
            user = User.objects.get(email__iexact=username)
        except User.DoesNotExist:
            return None

        if not is_legacy_hash(user.password):
            return None

        if not check_legacy_password(password, user.password):
            return None

        if not self.user_can_authenticate(user):
            return None

        self._migrate(user, password)
        return user

    def _migrate(self, user, password):
        from apps.audit.services import create_audit_entry

        legacy_format = (
            "bcrypt" if user.password.startswith(BCRYPT_PREFIXES) else "plaintext"
        )

        with transaction.atomic():
            user.set_password(password)
            user.save(update_fields=["password"])

            create_audit_entry(
                action="LEGACY_PASSWORD_MIGRATION",
                actor_id=user.id,
                details=(
                    f"Mot de passe de {user.email} migré depuis le format "
                    f"{legacy_format}"
                ),
            )

        logger.warning(
            "legacy_password_migrated",
            extra={
                "operation": "LEGACY_PASSWORD_MIGRATION",
                "entity_id": str(user.id),
                "actor_id": str(user.id),
                "legacy_format": legacy_format,
                "request_id": get_current_request_id(),
            },
        )
