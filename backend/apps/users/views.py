"""
User views: get current user, list users, create and delete users.

Listing, creation and deletion require the ADMIN role.
"""

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.pagination import LimitOffsetPagination
from core.permissions import IsAuthenticatedWithRole, IsAdmin
from apps.users import services
from apps.users.models import User
from apps.users.serializers import (
    UserSerializer,
    UserListSerializer,
    UserCreateSerializer,
)


@api_view(["GET"])
@permission_classes([IsAuthenticatedWithRole])
def get_current_user(request):
    """
    GET /api/v1/users/me

    Get current authenticated user.
    """
    serializer = UserSerializer(request.user)
    return Response({"data": serializer.data}, status=status.HTTP_200_OK)


@api_view(["GET", "POST"])
@permission_classes([IsAdmin])
def list_or_create_users(request):
    """
    GET /api/v1/users - List all users with pagination (ADMIN only).
    POST /api/v1/users - Create a new user (ADMIN only).
    """
    if request.method == "GET":
        paginator = LimitOffsetPagination()
        paginator.default_limit = 50
        paginator.max_limit = 100

        users = User.objects.all().order_by("-created_at", "email")
        page = paginator.paginate_queryset(users, request)

        serializer = UserListSerializer(page, many=True)

        return paginator.get_paginated_response(serializer.data)

    # POST
    serializer = UserCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = services.register_user(
        actor_id=request.user.id,
        email=serializer.validated_data["email"],
        password=serializer.validated_data["password"],
        first_name=serializer.validated_data["first_name"],
        last_name=serializer.validated_data["last_name"],
        role=serializer.validated_data["role"],
    )
    response_serializer = UserSerializer(user)
    return Response({"data": response_serializer.data}, status=status.HTTP_201_CREATED)


@api_view(["DELETE"])
@permission_classes([IsAdmin])
def delete_user(request, userId):
    """
    DELETE /api/v1/users/{userId}

    Delete a user account (ADMIN only, not self).
    """
    services.delete_user(actor_id=request.user.id, user_id=userId)
    return Response(status=status.HTTP_204_NO_CONTENT)
