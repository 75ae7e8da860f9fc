"""
Serializers for the Seizure model.

No business logic in serializers - validation only.
All mutations flow through service layer. Deadline fields are computed at
read time from seized_at and the request clock (``context["now"]``).
"""

from django.utils import timezone
from rest_framework import serializers

from apps.seizures.deadlines import deadline_status
from apps.seizures.models import InfractionReason, Seizure


class SeizureListSerializer(serializers.ModelSerializer):
    """Row shown in lists, the dashboard and search results."""

    id = serializers.UUIDField(read_only=True)
    chassisNumber = serializers.CharField(source="chassis_number", read_only=True)
    vehicleType = serializers.CharField(source="vehicle_type", read_only=True)
    plateNumber = serializers.CharField(
        source="plate_number", read_only=True, allow_null=True
    )
    driverName = serializers.CharField(source="driver_name", read_only=True)
    seizedAt = serializers.DateTimeField(source="seized_at", read_only=True)
    statusLabel = serializers.CharField(source="get_status_display", read_only=True)
    agentId = serializers.UUIDField(source="agent_id", read_only=True)
    agentName = serializers.CharField(source="agent.full_name", read_only=True)
    deadline = serializers.SerializerMethodField()

    class Meta:
        model = Seizure
        fields = [
            "id",
            "chassisNumber",
            "make",
            "model",
            "vehicleType",
            "plateNumber",
            "driverName",
            "location",
            "seizedAt",
            "status",
            "statusLabel",
            "agentId",
            "agentName",
            "deadline",
        ]
        read_only_fields = fields

    def get_deadline(self, obj):
        now = self.context.get("now") or timezone.now()
        return deadline_status(obj.seized_at, now).as_dict()


class SeizureDetailSerializer(SeizureListSerializer):
    """Full record with driver contact and infraction."""

    driverPhone = serializers.CharField(source="driver_phone", read_only=True)
    infractionCode = serializers.CharField(source="infraction_code", read_only=True)
    infractionReason = serializers.CharField(
        source="infraction_reason", read_only=True
    )
    agentRole = serializers.CharField(source="agent.role", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta(SeizureListSerializer.Meta):
        fields = SeizureListSerializer.Meta.fields + [
            "driverPhone",
            "infractionCode",
            "infractionReason",
            "agentRole",
            "updatedAt",
        ]
        read_only_fields = fields


class SeizureNotificationSerializer(SeizureDetailSerializer):
    """Snapshot consumed by the printed seizure notice."""

    deadlineDate = serializers.SerializerMethodField()

    class Meta(SeizureDetailSerializer.Meta):
        fields = SeizureDetailSerializer.Meta.fields + ["deadlineDate"]
        read_only_fields = fields

    def get_deadlineDate(self, obj):
        now = self.context.get("now") or timezone.now()
        deadline = deadline_status(obj.seized_at, now).deadline
        return timezone.localtime(deadline).date().isoformat()


class SeizureCreateSerializer(serializers.Serializer):
    """Request body for POST /seizures."""

    chassisNumber = serializers.CharField(max_length=100)
    make = serializers.CharField(max_length=50)
    model = serializers.CharField(max_length=50)
    vehicleType = serializers.CharField(max_length=50)
    plateNumber = serializers.CharField(
        max_length=20, required=False, allow_blank=True, allow_null=True
    )
    driverName = serializers.CharField(max_length=100)
    driverPhone = serializers.RegexField(r"^[0-9+\-\s()]+$", max_length=20)
    infractionCode = serializers.ChoiceField(choices=InfractionReason.choices)
    infractionDetail = serializers.CharField(
        max_length=500, required=False, allow_blank=True, allow_null=True
    )
    location = serializers.CharField(max_length=200)

    FIELD_MAP = {
        "chassisNumber": "chassis_number",
        "make": "make",
        "model": "model",
        "vehicleType": "vehicle_type",
        "plateNumber": "plate_number",
        "driverName": "driver_name",
        "driverPhone": "driver_phone",
        "infractionCode": "infraction_code",
        "infractionDetail": "infraction_detail",
        "location": "location",
    }

    def validate(self, attrs):
        if attrs.get("infractionCode") == InfractionReason.OTHER and not (
            attrs.get("infractionDetail") or ""
        ).strip():
            raise serializers.ValidationError(
                {"infractionDetail": ["Required when the reason is OTHER."]}
            )
        return attrs

    def to_service_kwargs(self):
        return {
            self.FIELD_MAP[key]: value for key, value in self.validated_data.items()
        }


class SeizureUpdateSerializer(SeizureCreateSerializer):
    """Request body for PATCH /seizures/{id}; used with partial=True."""

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("No field supplied")
        # The reason detail may be kept from the stored record
        return attrs
