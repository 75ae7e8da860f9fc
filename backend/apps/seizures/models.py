"""
Seizure model - one physically seized vehicle case.

chassis_number is the natural key (unique, immutable). seized_at is set at
creation and never changes; every deadline figure is derived from it.
"""

import uuid
from django.db import models

from apps.seizures import state_machine


class SeizureStatus(models.TextChoices):
    IN_PROGRESS = state_machine.IN_PROGRESS, "Saisie en cours"
    VALIDATED_FOR_DEPOSIT = state_machine.VALIDATED_FOR_DEPOSIT, "Validé pour dépôt"
    IN_DEPOSIT = state_machine.IN_DEPOSIT, "En dépôt"
    EXIT_AUTHORIZED = state_machine.EXIT_AUTHORIZED, "Sortie autorisée"
    EXIT_PERFORMED = state_machine.EXIT_PERFORMED, "Sortie effectuée"
    AUCTION_SALE = state_machine.AUCTION_SALE, "Vente aux enchères"


class InfractionReason(models.TextChoices):
    T1_DEFAULT = "T1_DEFAULT", "Défaut de T1"
    SMUGGLING = "SMUGGLING", "Contrebande (Art. 429)"
    UNDECLARED_IMPORT = (
        "UNDECLARED_IMPORT",
        "Importation sans déclaration (Art. 432)",
    )
    DEADLINE_OVERRUN = "DEADLINE_OVERRUN", "Dépassement délai (Art. 296/440)"
    OTHER = "OTHER", "Autre (préciser)"


class Seizure(models.Model):
    """Seizure model - vehicle taken into custody."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    chassis_number = models.CharField(max_length=100, unique=True)
    make = models.CharField(max_length=50)
    model = models.CharField(max_length=50)
    vehicle_type = models.CharField(max_length=50)
    plate_number = models.CharField(max_length=20, null=True, blank=True)
    driver_name = models.CharField(max_length=100)
    driver_phone = models.CharField(max_length=20)
    infraction_code = models.CharField(
        max_length=30, choices=InfractionReason.choices
    )
    # Label of the fixed reason, or the free text when the code is OTHER.
    infraction_reason = models.CharField(max_length=500)
    location = models.CharField(max_length=200)
    seized_at = models.DateTimeField()
    status = models.CharField(
        max_length=30,
        choices=SeizureStatus.choices,
        default=SeizureStatus.IN_PROGRESS,
    )
    agent = models.ForeignKey(
        "users.User", on_delete=models.PROTECT, related_name="seizures"
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "seizures"
        constraints = [
            models.CheckConstraint(
                condition=models.Q(status__in=list(state_machine.ALL_STATUSES)),
                name="valid_seizure_status",
            ),
        ]
        indexes = [
            models.Index(fields=["status"], name="idx_seizure_status"),
            models.Index(fields=["seized_at"], name="idx_seizure_seized_at"),
            models.Index(fields=["agent"], name="idx_seizure_agent"),
        ]
        ordering = ["-seized_at"]

    def __str__(self):
        return f"{self.chassis_number} ({self.status})"
