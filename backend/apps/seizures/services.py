"""
Seizure services - all mutations flow through this layer.

Rules:
- All mutations wrapped in transaction.atomic
- Use select_for_update for row-level locking
- Re-check the role policy before every change
- Exactly one audit entry per successful mutation
- No direct model.save() from views
"""

import logging
import re

from django.db import IntegrityError, transaction
from django.utils import timezone

from core.exceptions import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from core.middleware import get_current_request_id
from core.permissions import Action, is_allowed
from apps.audit.services import create_audit_entry
from apps.seizures import cache as view_cache
from apps.seizures.models import InfractionReason, Seizure
from apps.seizures.state_machine import (
    EXIT_AUTHORIZED,
    EXIT_PERFORMED,
    IN_PROGRESS,
    is_editable,
    validate_transition,
)

logger = logging.getLogger(__name__)

PHONE_PATTERN = re.compile(r"^[0-9+\-\s()]+$")

# field -> (max length, required)
FIELD_RULES = {
    "chassis_number": (100, True),
    "make": (50, True),
    "model": (50, True),
    "vehicle_type": (50, True),
    "plate_number": (20, False),
    "driver_name": (100, True),
    "driver_phone": (20, True),
    "location": (200, True),
}

EDITABLE_FIELDS = (
    "make",
    "model",
    "vehicle_type",
    "plate_number",
    "driver_name",
    "driver_phone",
    "infraction_code",
    "infraction_detail",
    "location",
)

REASON_MAX_LENGTH = 500


def _get_actor(actor_id):
    from apps.users.models import User

    try:
        return User.objects.get(id=actor_id)
    except User.DoesNotExist:
        raise NotFoundError(f"User {actor_id} does not exist")


def _deny(actor, operation, seizure_id, message):
    logger.warning(
        "seizure_action_denied",
        extra={
            "operation": operation,
            "entity_id": str(seizure_id) if seizure_id else None,
            "actor_id": str(actor.id),
            "role": actor.role,
            "request_id": get_current_request_id(),
        },
    )
    raise PermissionDeniedError(message)


def _log_event(event, operation, seizure, actor):
    logger.info(
        event,
        extra={
            "operation": operation,
            "entity_id": str(seizure.id),
            "actor_id": str(actor.id),
            "request_id": get_current_request_id(),
        },
    )


def _clean_text(field, value):
    max_length, required = FIELD_RULES[field]
    value = str(value).strip() if value is not None else ""

    if not value:
        if not required:
            return None
        raise ValidationError(
            f"{field} must be non-empty", {field: ["This field is required."]}
        )

    if len(value) > max_length:
        raise ValidationError(
            f"{field} exceeds {max_length} characters",
            {field: [f"Ensure this field has no more than {max_length} characters."]},
        )

    if field == "driver_phone" and not PHONE_PATTERN.match(value):
        raise ValidationError(
            "Invalid phone number", {field: ["Invalid phone number format."]}
        )

    return value


def resolve_infraction_reason(code, detail=None):
    """
    Map an infraction code to the stored reason text.

    Fixed reasons store their label; OTHER stores the free-text detail,
    which must then be non-empty.
    """
    if code not in InfractionReason.values:
        raise ValidationError(
            "Invalid infraction reason",
            {"infraction_code": [f"Unknown reason {code}"]},
        )

    if code != InfractionReason.OTHER:
        return InfractionReason(code).label

    detail = (detail or "").strip()
    if not detail:
        raise ValidationError(
            "Reason detail is required when the reason is OTHER",
            {"infraction_detail": ["This field is required."]},
        )
    if len(detail) > REASON_MAX_LENGTH:
        raise ValidationError(
            f"Reason detail exceeds {REASON_MAX_LENGTH} characters",
            {"infraction_detail": ["Too long."]},
        )
    return detail


def _invalidate_views():
    transaction.on_commit(view_cache.bump_version)


def create_seizure(
    actor_id,
    chassis_number,
    make,
    model,
    vehicle_type,
    driver_name,
    driver_phone,
    infraction_code,
    location,
    plate_number=None,
    infraction_detail=None,
):
    """
    Record a new seizure with status IN_PROGRESS.

    seized_at is the server clock at creation and agent is the actor.

    Returns:
        Seizure: Created seizure

    Raises:
        PermissionDeniedError: If the actor's role cannot create seizures
        ValidationError: If a field is missing or malformed
        ConflictError: If the chassis number is already recorded
    """
    actor = _get_actor(actor_id)
    if not is_allowed(actor.role, Action.CREATE_SEIZURE):
        _deny(actor, "CREATE_SEIZURE", None, "Your role cannot record seizures")

    fields = {
        "chassis_number": _clean_text("chassis_number", chassis_number),
        "make": _clean_text("make", make),
        "model": _clean_text("model", model),
        "vehicle_type": _clean_text("vehicle_type", vehicle_type),
        "plate_number": _clean_text("plate_number", plate_number),
        "driver_name": _clean_text("driver_name", driver_name),
        "driver_phone": _clean_text("driver_phone", driver_phone),
        "location": _clean_text("location", location),
        "infraction_code": infraction_code,
        "infraction_reason": resolve_infraction_reason(
            infraction_code, infraction_detail
        ),
    }

    chassis = fields["chassis_number"]
    if Seizure.objects.filter(chassis_number=chassis).exists():
        raise ConflictError(
            f"A seizure with chassis number '{chassis}' already exists",
            {"chassis_number": chassis},
        )

    try:
        with transaction.atomic():
            seizure = Seizure.objects.create(
                status=IN_PROGRESS,
                seized_at=timezone.now(),
                agent=actor,
                **fields,
            )

            create_audit_entry(
                action="SEIZURE_CREATION",
                actor_id=actor.id,
                details=(
                    f"Saisie du véhicule {seizure.chassis_number} "
                    f"({seizure.make} {seizure.model}) par {actor.full_name}"
                ),
                seizure_id=seizure.id,
            )
            _invalidate_views()
    except IntegrityError:
        # Concurrent insert of the same chassis
        raise ConflictError(
            f"A seizure with chassis number '{chassis}' already exists",
            {"chassis_number": chassis},
        )

    _log_event("seizure_created", "CREATE_SEIZURE", seizure, actor)
    return seizure


def update_seizure(seizure_id, actor_id, **changes):
    """
    Edit an IN_PROGRESS seizure.

    Only the recording agent or an administrator may edit, and only while
    the seizure is IN_PROGRESS. The chassis number cannot change.

    Raises:
        NotFoundError: If seizure does not exist
        PermissionDeniedError: If the actor may not edit this seizure
        InvalidStateError: If the seizure has left IN_PROGRESS
        ValidationError: If a field is malformed or immutable
    """
    actor = _get_actor(actor_id)
    if not is_allowed(actor.role, Action.EDIT_SEIZURE):
        _deny(actor, "UPDATE_SEIZURE", seizure_id, "Your role cannot edit seizures")

    with transaction.atomic():
        try:
            seizure = Seizure.objects.select_for_update().get(id=seizure_id)
        except Seizure.DoesNotExist:
            raise NotFoundError(f"Seizure {seizure_id} does not exist")

        if not is_editable(seizure.status):
            raise InvalidStateError(
                f"Cannot edit seizure with status {seizure.status}",
                {"current_status": seizure.status},
            )

        if seizure.agent_id != actor.id and not is_allowed(
            actor.role, Action.EDIT_ANY_SEIZURE
        ):
            _deny(
                actor,
                "UPDATE_SEIZURE",
                seizure.id,
                "Only the recording agent or an administrator can edit this seizure",
            )

        if "chassis_number" in changes:
            new_chassis = (changes.pop("chassis_number") or "").strip()
            if new_chassis != seizure.chassis_number:
                raise ValidationError(
                    "Chassis number cannot be changed",
                    {"chassis_number": ["This field is immutable."]},
                )

        unknown = sorted(set(changes) - set(EDITABLE_FIELDS))
        if unknown:
            raise ValidationError(
                "Fields cannot be edited",
                {field: ["This field cannot be edited."] for field in unknown},
            )

        changed = []
        for field, value in changes.items():
            if field in FIELD_RULES:
                setattr(seizure, field, _clean_text(field, value))
                changed.append(field)

        if "infraction_code" in changes or "infraction_detail" in changes:
            code = changes.get("infraction_code", seizure.infraction_code)
            detail = changes.get("infraction_detail")
            if code != InfractionReason.OTHER and (detail or "").strip():
                raise ValidationError(
                    "A reason detail is only accepted when the reason is OTHER",
                    {"infraction_detail": ["Only allowed with the OTHER reason."]},
                )
            if (
                detail is None
                and code == InfractionReason.OTHER
                and seizure.infraction_code == InfractionReason.OTHER
            ):
                detail = seizure.infraction_reason
            reason = resolve_infraction_reason(code, detail)
            if (code, reason) != (seizure.infraction_code, seizure.infraction_reason):
                seizure.infraction_code = code
                seizure.infraction_reason = reason
                changed.append("infraction_reason")

        if not changed:
            raise ValidationError("No editable field supplied")

        seizure.save()

        create_audit_entry(
            action="SEIZURE_UPDATE",
            actor_id=actor.id,
            details=(
                f"Modification de la saisie {seizure.chassis_number} par "
                f"{actor.full_name} ({', '.join(changed)})"
            ),
            seizure_id=seizure.id,
        )
        _invalidate_views()

    _log_event("seizure_updated", "UPDATE_SEIZURE", seizure, actor)
    return seizure


def _transition(seizure_id, actor_id, target_status, operation):
    """Lock the seizure and move it to ``target_status``. Caller owns the transaction."""
    actor = _get_actor(actor_id)
    if not is_allowed(actor.role, Action.MANAGE_EXIT):
        _deny(
            actor,
            operation,
            seizure_id,
            "Only administrators, bureau chiefs and brigade chiefs can decide exits",
        )

    try:
        seizure = Seizure.objects.select_for_update().get(id=seizure_id)
    except Seizure.DoesNotExist:
        raise NotFoundError(f"Seizure {seizure_id} does not exist")

    validate_transition(seizure.status, target_status)
    seizure.status = target_status
    seizure.save(update_fields=["status", "updated_at"])

    return actor, seizure


def validate_exit(seizure_id, actor_id):
    """
    Authorize the vehicle's exit (status EXIT_AUTHORIZED).

    Applies from any status; the last decision wins.

    Raises:
        NotFoundError: If seizure does not exist
        PermissionDeniedError: If actor is not ADMIN, BUREAU_CHIEF or BRIGADE_CHIEF
    """
    with transaction.atomic():
        actor, seizure = _transition(
            seizure_id, actor_id, EXIT_AUTHORIZED, "VALIDATE_EXIT"
        )

        create_audit_entry(
            action="EXIT_VALIDATION",
            actor_id=actor.id,
            details=(
                f"Sortie validée pour le véhicule {seizure.chassis_number} "
                f"par {actor.full_name}"
            ),
            seizure_id=seizure.id,
        )
        _invalidate_views()

    _log_event("seizure_exit_validated", "VALIDATE_EXIT", seizure, actor)
    return seizure


def cancel_seizure(seizure_id, actor_id):
    """
    Cancel a seizure (status EXIT_PERFORMED).

    Applies from any status; the last decision wins.

    Raises:
        NotFoundError: If seizure does not exist
        PermissionDeniedError: If actor is not ADMIN, BUREAU_CHIEF or BRIGADE_CHIEF
    """
    with transaction.atomic():
        actor, seizure = _transition(
            seizure_id, actor_id, EXIT_PERFORMED, "CANCEL_SEIZURE"
        )

        create_audit_entry(
            action="SEIZURE_CANCELLATION",
            actor_id=actor.id,
            details=(
                f"Saisie {seizure.chassis_number} annulée par {actor.full_name}"
            ),
            seizure_id=seizure.id,
        )
        _invalidate_views()

    _log_event("seizure_cancelled", "CANCEL_SEIZURE", seizure, actor)
    return seizure
