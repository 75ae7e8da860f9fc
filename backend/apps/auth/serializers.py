"""
Serializers for authentication endpoints.
"""

from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    """Serializer for login request."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(required=True, write_only=True)


class RefreshSerializer(serializers.Serializer):
    """Serializer for token refresh and logout requests."""

    refresh = serializers.CharField(required=True)
