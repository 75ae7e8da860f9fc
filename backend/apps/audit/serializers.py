"""
Serializers for AuditLog model.
"""

from rest_framework import serializers
from apps.audit.models import AuditLog


class AuditLogSerializer(serializers.ModelSerializer):
    """Serializer for AuditLog."""

    id = serializers.UUIDField(read_only=True)
    action = serializers.CharField(read_only=True)
    actorId = serializers.UUIDField(source="actor_id", read_only=True)
    actorName = serializers.CharField(source="actor.full_name", read_only=True)
    actorEmail = serializers.CharField(source="actor.email", read_only=True)
    details = serializers.CharField(read_only=True)
    seizureId = serializers.UUIDField(
        source="seizure_id", read_only=True, allow_null=True
    )
    chassisNumber = serializers.CharField(
        source="seizure.chassis_number", read_only=True, allow_null=True, default=None
    )
    occurredAt = serializers.DateTimeField(source="occurred_at", read_only=True)

    class Meta:
        model = AuditLog
        fields = [
            "id",
            "action",
            "actorId",
            "actorName",
            "actorEmail",
            "details",
            "seizureId",
            "chassisNumber",
            "occurredAt",
        ]


class AuditExportRowSerializer(serializers.ModelSerializer):
    """Flat, never-null row consumed by the audit PDF export."""

    occurredAt = serializers.DateTimeField(source="occurred_at", read_only=True)
    user = serializers.SerializerMethodField()
    action = serializers.SerializerMethodField()
    details = serializers.SerializerMethodField()

    class Meta:
        model = AuditLog
        fields = ["occurredAt", "user", "action", "details"]

    def get_user(self, obj):
        actor = obj.actor
        if actor is None:
            return {
                "lastName": "Utilisateur supprimé",
                "firstName": "",
                "email": "",
                "role": "INCONNU",
            }
        return {
            "lastName": actor.last_name or "",
            "firstName": actor.first_name or "",
            "email": actor.email or "",
            "role": str(actor.role),
        }

    def get_action(self, obj):
        return obj.action or "ACTION_INCONNUE"

    def get_details(self, obj):
        return obj.details or "Aucun détail disponible"
