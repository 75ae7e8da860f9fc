"""
Serializers for User model.

No business logic in serializers - validation only.
"""

from rest_framework import serializers
from apps.users.models import User, Role


class UserSerializer(serializers.ModelSerializer):
    """Serializer for User model."""

    id = serializers.UUIDField(read_only=True)
    role = serializers.ChoiceField(choices=Role.choices, read_only=True)
    firstName = serializers.CharField(source="first_name", read_only=True)
    lastName = serializers.CharField(source="last_name", read_only=True)
    fullName = serializers.CharField(source="full_name", read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "firstName", "lastName", "fullName", "role"]
        read_only_fields = ["id", "email", "role"]


class UserListSerializer(serializers.ModelSerializer):
    """Serializer for user list endpoint."""

    id = serializers.UUIDField(read_only=True)
    firstName = serializers.CharField(source="first_name", read_only=True)
    lastName = serializers.CharField(source="last_name", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "firstName", "lastName", "role", "createdAt"]


class UserCreateSerializer(serializers.Serializer):
    """Serializer for user creation endpoint."""

    email = serializers.EmailField(min_length=5, max_length=100, required=True)
    password = serializers.CharField(
        write_only=True, min_length=6, max_length=100, required=True
    )
    firstName = serializers.CharField(
        min_length=2, max_length=50, required=True, source="first_name"
    )
    lastName = serializers.CharField(
        min_length=2, max_length=50, required=True, source="last_name"
    )
    role = serializers.ChoiceField(choices=Role.choices, required=True)
