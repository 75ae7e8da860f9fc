"""
Authentication views: login, token refresh, logout.

No domain logic - authentication only.
"""

import logging

from django.contrib.auth import authenticate
from django.contrib.auth.models import update_last_login
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from core.exceptions import PermissionDeniedError
from core.middleware import get_current_request_id
from core.permissions import IsAuthenticatedWithRole
from core.throttling import LoginThrottle
from apps.auth.serializers import LoginSerializer, RefreshSerializer
from apps.auth.tokens import issue_tokens
from apps.users.serializers import UserSerializer

logger = logging.getLogger(__name__)


@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([LoginThrottle])
def login(request):
    """
    POST /api/v1/auth/login

    Authenticate by e-mail and password, return JWT tokens.
    """
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    email = serializer.validated_data["email"]
    password = serializer.validated_data["password"]

    user = authenticate(request, username=email, password=password)

    if user is None:
        logger.warning(
            "login_failed",
            extra={"operation": "LOGIN", "request_id": get_current_request_id()},
        )
        return Response(
            {
                "error": {
                    "code": "UNAUTHORIZED",
                    "message": "Invalid credentials",
                    "details": {},
                }
            },
            status=status.HTTP_401_UNAUTHORIZED,
        )

    refresh_token, access_token = issue_tokens(user)
    update_last_login(None, user)

    user_data = UserSerializer(user).data

    return Response(
        {
            "data": {
                "token": access_token,
                "refresh": refresh_token,
                "user": user_data,
            }
        },
        status=status.HTTP_200_OK,
    )


@api_view(["POST"])
@permission_classes([AllowAny])
def refresh(request):
    """
    POST /api/v1/auth/refresh

    Exchange a refresh token for a new access token.
    """
    serializer = RefreshSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        token = RefreshToken(serializer.validated_data["refresh"])
    except TokenError as exc:
        raise InvalidToken(str(exc))

    return Response(
        {"data": {"token": str(token.access_token)}}, status=status.HTTP_200_OK
    )


@api_view(["POST"])
@permission_classes([IsAuthenticatedWithRole])
def logout(request):
    """
    POST /api/v1/auth/logout

    Blacklist the caller's refresh token.
    """
    serializer = RefreshSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        token = RefreshToken(serializer.validated_data["refresh"])
    except TokenError:
        # Already expired or blacklisted
        logger.info(
            "logout_token_already_invalid",
            extra={"operation": "LOGOUT", "actor_id": str(request.user.id)},
        )
        return Response({"data": {"success": True}}, status=status.HTTP_200_OK)

    if str(token.get("user_id")) != str(request.user.id):
        raise PermissionDeniedError("Refresh token belongs to another user")

    token.blacklist()

    return Response({"data": {"success": True}}, status=status.HTTP_200_OK)
