"""Shared builders for seizure tests."""

import uuid
from datetime import timedelta

from django.utils import timezone

from apps.seizures.models import Seizure
from apps.users.models import User


def make_user(role, **extra):
    suffix = uuid.uuid4().hex[:8]
    return User.objects.create_user(
        email=extra.pop("email", f"{role.lower()}_{suffix}@douanes.local"),
        password=extra.pop("password", "testpass123"),
        first_name=extra.pop("first_name", role.title().replace("_", " ")),
        last_name=extra.pop("last_name", suffix),
        role=role,
        **extra,
    )


def seizure_fields(**overrides):
    fields = {
        "chassis_number": "VF1" + uuid.uuid4().hex[:14].upper(),
        "make": "Toyota",
        "model": "Hilux",
        "vehicle_type": "Pick-up",
        "plate_number": "AB-123-CD",
        "driver_name": "Moussa Diallo",
        "driver_phone": "+221 77 000 00 00",
        "infraction_code": "T1_DEFAULT",
        "location": "Poste de Rosso",
    }
    fields.update(overrides)
    return fields


def make_seizure(agent, days_ago=0, status="IN_PROGRESS", **overrides):
    """Insert a seizure directly, bypassing the service layer (test fixture only)."""
    fields = seizure_fields(**overrides)
    fields.pop("infraction_detail", None)
    fields.setdefault("infraction_reason", "Défaut de T1")
    return Seizure.objects.create(
        agent=agent,
        status=status,
        seized_at=timezone.now() - timedelta(days=days_ago),
        **fields,
    )
