"""
Domain exceptions for the Vehicle Seizure Registry.

All exceptions follow the standard error format:
{
    "error": {
        "code": "ERROR_CODE",
        "message": "Human-readable description",
        "details": {}
    }
"""

from django.http import Http404
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
import logging

logger = logging.getLogger(__name__)


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, code, message, details=None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(DomainError):
    """Validation error - request body or parameters fail validation."""

    def __init__(self, message, details=None):
        super().__init__("VALIDATION_ERROR", message, details)


class InvalidStateError(DomainError):
    """Entity is not in the required state for the operation."""

    def __init__(self, message, details=None):
        super().__init__("INVALID_STATE", message, details)


class NotFoundError(DomainError):
    """Requested resource does not exist."""

    def __init__(self, message, details=None):
        super().__init__("NOT_FOUND", message, details)


class PermissionDeniedError(DomainError):
    """Authenticated user lacks required role."""

    def __init__(self, message, details=None):
        super().__init__("FORBIDDEN", message, details)


class ConflictError(DomainError):
    """Write would violate a uniqueness or reference constraint."""

    def __init__(self, message, details=None):
        super().__init__("CONFLICT", message, details)


STATUS_CODE_MAP = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_STATE": status.HTTP_409_CONFLICT,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "CONFLICT": status.HTTP_409_CONFLICT,
}


def domain_exception_handler(exc, context):
    """
    Custom exception handler for domain exceptions.

    Returns standard error format:
    {
        "error": {
            "code": "ERROR_CODE",
            "message": "Human-readable description",
            "details": {}
        }
    }
    """
    # Handle domain exceptions
    if isinstance(exc, DomainError):
        status_code = STATUS_CODE_MAP.get(exc.code, status.HTTP_400_BAD_REQUEST)

        return Response(
            {
                "error": {
                    "code": exc.code,
                    "message": exc.message,
                    "details": exc.details,
                }
            },
            status=status_code,
        )

    # Use default REST framework exception handler for other exceptions
    response = exception_handler(exc, context)

    if response is not None:
        if isinstance(
            exc, (drf_exceptions.NotAuthenticated, drf_exceptions.AuthenticationFailed)
        ):
            code = "UNAUTHORIZED"
        elif isinstance(exc, drf_exceptions.PermissionDenied):
            code = "FORBIDDEN"
        elif isinstance(exc, drf_exceptions.ValidationError):
            code = "VALIDATION_ERROR"
        elif isinstance(exc, (drf_exceptions.NotFound, Http404)):
            code = "NOT_FOUND"
        elif isinstance(exc, drf_exceptions.Throttled):
            code = "THROTTLED"
        else:
            code = "INTERNAL_ERROR"

        # Format standard REST framework errors
        if isinstance(response.data, dict) and "detail" in response.data:
            error_data = {
                "error": {
                    "code": code,
                    "message": str(response.data["detail"]),
                    "details": {},
                }
            }
        else:
            error_data = {
                "error": {
                    "code": code,
                    "message": "Invalid input",
                    "details": response.data,
                }
            }

        response.data = error_data

    # Log unhandled exceptions
    if response is None:
        logger.exception("Unhandled exception", exc_info=exc)
        return Response(
            {
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An internal error occurred, please try again",
                    "details": {},
                }
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return response
