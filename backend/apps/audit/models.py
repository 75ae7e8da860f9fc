"""
AuditLog model - immutable chronological record of user actions.

Audit logs are append-only. No update or delete operations, neither on
instances nor through querysets.
"""

import uuid
from django.db import models


class AuditAction(models.TextChoices):
    SEIZURE_CREATION = "SEIZURE_CREATION", "Création de saisie"
    SEIZURE_UPDATE = "SEIZURE_UPDATE", "Modification de saisie"
    EXIT_VALIDATION = "EXIT_VALIDATION", "Validation de sortie"
    SEIZURE_CANCELLATION = "SEIZURE_CANCELLATION", "Annulation de saisie"
    USER_CREATION = "USER_CREATION", "Création d'utilisateur"
    USER_DELETION = "USER_DELETION", "Suppression d'utilisateur"
    LEGACY_PASSWORD_MIGRATION = (
        "LEGACY_PASSWORD_MIGRATION",
        "Migration de mot de passe",
    )


class AuditLogQuerySet(models.QuerySet):
    """Queryset that refuses bulk mutation of audit rows."""

    def update(self, **kwargs):
        raise ValueError("AuditLog entries are append-only. Updates are not allowed.")

    def delete(self):
        raise ValueError("AuditLog entries are append-only. Deletions are not allowed.")


class AuditLog(models.Model):
    """AuditLog model - immutable audit trail."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    action = models.CharField(max_length=50)
    actor = models.ForeignKey(
        "users.User",
        on_delete=models.PROTECT,
        related_name="audit_actions",
    )
    details = models.TextField(blank=True, default="")
    seizure = models.ForeignKey(
        "seizures.Seizure",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="audit_entries",
    )
    request_id = models.CharField(max_length=64, null=True, blank=True)
    occurred_at = models.DateTimeField(auto_now_add=True)

    objects = AuditLogQuerySet.as_manager()

    class Meta:
        db_table = "audit_logs"
        indexes = [
            models.Index(fields=["action"], name="idx_audit_action"),
            models.Index(fields=["occurred_at"], name="idx_audit_occurred"),
            models.Index(fields=["actor"], name="idx_audit_actor"),
            models.Index(fields=["seizure"], name="idx_audit_seizure"),
        ]
        ordering = ["-occurred_at"]

    def __str__(self):
        return f"{self.action} by {self.actor_id} at {self.occurred_at}"

    def save(self, *args, **kwargs):
        """Override save to prevent updates."""
        if self.pk and AuditLog.objects.filter(pk=self.pk).exists():
            raise ValueError(
                "AuditLog entries are append-only. Updates are not allowed."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """Override delete to prevent deletion."""
        raise ValueError("AuditLog entries are append-only. Deletions are not allowed.")
