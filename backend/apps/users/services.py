"""
Service-layer functions for the Users app.

This module exists to keep models passive:
- No business logic in models
- No permission logic in models
- Persistence orchestration (create/save/delete) lives here
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Type

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from core.middleware import get_current_request_id
from core.permissions import Action, is_allowed

logger = logging.getLogger(__name__)


def create_user(
    *,
    user_model: Type[Any],
    email: str,
    password: Optional[str] = None,
    first_name: str = "",
    last_name: str = "",
    role: str = "CONSULTATION_AGENT",
    using: Optional[str] = None,
    **extra_fields: Any,
):
    """Create and persist a user with a hashed password."""
    if not email:
        raise ValueError("The email field must be set")

    user = user_model(
        email=email,
        first_name=first_name,
        last_name=last_name,
        role=role,
        **extra_fields,
    )
    user.set_password(password)
    if using is None:
        user.save()
    else:
        user.save(using=using)
    return user


def create_superuser(
    *,
    user_model: Type[Any],
    email: str,
    password: Optional[str] = None,
    using: Optional[str] = None,
    **extra_fields: Any,
):
    """Create an ADMIN user (``createsuperuser`` and ``seed_admin``)."""
    extra_fields["role"] = "ADMIN"
    extra_fields.setdefault("first_name", "Super")
    extra_fields.setdefault("last_name", "Admin")
    return create_user(
        user_model=user_model,
        email=email,
        password=password,
        using=using,
        **extra_fields,
    )


def user_is_staff(*, user: Any) -> bool:
    """Django admin compatibility predicate."""
    return user.role == "ADMIN"


def user_is_superuser(*, user: Any) -> bool:
    """Django admin compatibility predicate."""
    return user.role == "ADMIN"


def user_has_perm(*, user: Any, perm: str, obj: Any = None) -> bool:
    """Django admin compatibility predicate."""
    _ = (perm, obj)
    return user.role == "ADMIN"


def user_has_module_perms(*, user: Any, app_label: str) -> bool:
    """Django admin compatibility predicate."""
    _ = app_label
    return user.role == "ADMIN"


def _get_actor(actor_id):
    from apps.users.models import User

    try:
        return User.objects.get(id=actor_id)
    except User.DoesNotExist:
        raise NotFoundError(f"User {actor_id} does not exist")


def register_user(actor_id, email, password, first_name, last_name, role):
    """
    Create a user account on behalf of an administrator.

    Args:
        actor_id: Identifier of the administrator performing the action
        email, password, first_name, last_name, role: account fields

    Returns:
        User: Created user

    Raises:
        PermissionDeniedError: If actor is not ADMIN
        ConflictError: If the e-mail is already used
        ValidationError: If a field is empty
    """
    from apps.users.models import User, Role
    from apps.audit.services import create_audit_entry

    actor = _get_actor(actor_id)
    if not is_allowed(actor.role, Action.MANAGE_USERS):
        raise PermissionDeniedError("Only administrators can create users")

    if role not in Role.values:
        raise ValidationError("Invalid role", {"role": [f"Unknown role {role}"]})

    email = User.objects.normalize_email((email or "").strip())
    if not email:
        raise ValidationError("Email must be non-empty")

    if User.objects.filter(email__iexact=email).exists():
        raise ConflictError(f"A user with email '{email}' already exists")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                first_name=first_name.strip(),
                last_name=last_name.strip(),
                role=role,
            )

            create_audit_entry(
                action="USER_CREATION",
                actor_id=actor.id,
                details=(
                    f"Compte créé pour {user.email} par l'administrateur "
                    f"{actor.full_name}"
                ),
            )
    except IntegrityError:
        raise ConflictError(f"A user with email '{email}' already exists")

    logger.info(
        "user_created",
        extra={
            "operation": "CREATE_USER",
            "entity_id": str(user.id),
            "actor_id": str(actor.id),
            "request_id": get_current_request_id(),
        },
    )
    return user


def delete_user(actor_id, user_id):
    """
    Delete a user account.

    An administrator cannot delete their own account. Users referenced by
    seizures or audit entries cannot be deleted (ConflictError).
    """
    from apps.users.models import User
    from apps.audit.services import create_audit_entry

    actor = _get_actor(actor_id)
    if not is_allowed(actor.role, Action.MANAGE_USERS):
        raise PermissionDeniedError("Only administrators can delete users")

    try:
        target = User.objects.get(id=user_id)
    except User.DoesNotExist:
        raise NotFoundError(f"User {user_id} does not exist")

    if target.id == actor.id:
        raise ValidationError(
            "You cannot delete your own account; ask another administrator"
        )

    description = f"{target.email} ({target.full_name})"

    try:
        with transaction.atomic():
            target.delete()

            create_audit_entry(
                action="USER_DELETION",
                actor_id=actor.id,
                details=(
                    f"Utilisateur {description} supprimé par l'administrateur "
                    f"{actor.full_name}"
                ),
            )
    except ProtectedError:
        raise ConflictError(
            "User is referenced by seizures or audit entries and cannot be deleted"
        )

    logger.info(
        "user_deleted",
        extra={
            "operation": "DELETE_USER",
            "entity_id": str(user_id),
            "actor_id": str(actor.id),
            "request_id": get_current_request_id(),
        },
    )
