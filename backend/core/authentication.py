"""
JWT authentication with an explicit role claim.

The token is inspected before any store access: a token without a role
claim, or with a role outside the known set, is treated as unauthenticated.
Only after the claim passes is the user loaded, and the stored role must
still match the claim (a role change invalidates outstanding tokens).
"""

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

from core.permissions import ALL_ROLES

ROLE_CLAIM = "role"


def role_from_token(validated_token):
    """Return the role carried by the token, or None when missing/unknown."""
    role = validated_token.get(ROLE_CLAIM)
    if role not in ALL_ROLES:
        return None
    return role


class RoleClaimJWTAuthentication(JWTAuthentication):
    """Bearer-token authentication that refuses tokens lacking a valid role."""

    def get_validated_token(self, raw_token):
        validated_token = super().get_validated_token(raw_token)

        if role_from_token(validated_token) is None:
            raise InvalidToken("Token carries no valid role claim")

        return validated_token

    def get_user(self, validated_token):
        user = super().get_user(validated_token)

        if user.role != role_from_token(validated_token):
            raise InvalidToken("Token role no longer matches the user's role")

        return user
