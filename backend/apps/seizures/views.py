"""
Seizure API views.

All mutations flow through service layer.
All endpoints define permission_classes per the role policy.
"""

import logging

from django.db.models import Q
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import LimitOffsetPagination
from rest_framework.response import Response

from core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from core.permissions import (
    CanCreateSeizure,
    CanEditSeizure,
    CanManageExit,
    CanViewReports,
    CanViewSeizures,
)
from apps.seizures import cache as view_cache
from apps.seizures import reports, services
from apps.seizures.models import Seizure, SeizureStatus
from apps.seizures.serializers import (
    SeizureCreateSerializer,
    SeizureDetailSerializer,
    SeizureListSerializer,
    SeizureNotificationSerializer,
    SeizureUpdateSerializer,
)

logger = logging.getLogger(__name__)


def _get_seizure(seizure_id):
    try:
        return Seizure.objects.select_related("agent").get(id=seizure_id)
    except Seizure.DoesNotExist:
        raise NotFoundError(f"Seizure {seizure_id} does not exist")


def _parse_year(request):
    raw = request.query_params.get("year")
    if not raw:
        return timezone.localtime().year
    try:
        year = int(raw)
    except ValueError:
        raise ValidationError("Invalid year", {"year": [raw]})
    if year < 1900 or year > 9999:
        raise ValidationError("Invalid year", {"year": [raw]})
    return year


@api_view(["GET", "POST"])
@permission_classes([CanViewSeizures])
def list_or_create_seizures(request):
    """
    GET /api/v1/seizures - List seizures (filters: status, q, overdue)
    POST /api/v1/seizures - Record a new seizure
    """
    if request.method == "POST":
        if not CanCreateSeizure().has_permission(request, None):
            raise PermissionDeniedError("Your role cannot record seizures")

        serializer = SeizureCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        seizure = services.create_seizure(
            request.user.id, **serializer.to_service_kwargs()
        )
        return Response(
            {"data": SeizureDetailSerializer(seizure).data},
            status=status.HTTP_201_CREATED,
        )

    now = timezone.now()
    queryset = Seizure.objects.select_related("agent").order_by("-seized_at")

    status_filter = request.query_params.get("status")
    if status_filter:
        if status_filter not in SeizureStatus.values:
            raise ValidationError(
                "Invalid status filter", {"status": [status_filter]}
            )
        queryset = queryset.filter(status=status_filter)

    search = (request.query_params.get("q") or "").strip()
    if search:
        queryset = queryset.filter(
            Q(chassis_number__icontains=search)
            | Q(driver_name__icontains=search)
            | Q(make__icontains=search)
        )

    if request.query_params.get("overdue") == "true":
        queryset = reports.overdue_queryset(queryset, now=now)

    paginator = LimitOffsetPagination()
    paginator.default_limit = 50
    paginator.max_limit = 100

    page = paginator.paginate_queryset(queryset, request)
    serializer = SeizureListSerializer(page, many=True, context={"now": now})

    return paginator.get_paginated_response(serializer.data)


@api_view(["GET", "PATCH"])
@permission_classes([CanViewSeizures])
def seizure_detail(request, seizureId):
    """
    GET /api/v1/seizures/{seizureId} - Detail with deadline fields
    PATCH /api/v1/seizures/{seizureId} - Edit an in-progress seizure
    """
    if request.method == "PATCH":
        if not CanEditSeizure().has_permission(request, None):
            raise PermissionDeniedError("Your role cannot edit seizures")

        serializer = SeizureUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        seizure = services.update_seizure(
            seizureId, request.user.id, **serializer.to_service_kwargs()
        )
        return Response(
            {"data": SeizureDetailSerializer(seizure).data},
            status=status.HTTP_200_OK,
        )

    seizure = _get_seizure(seizureId)
    serializer = SeizureDetailSerializer(seizure, context={"now": timezone.now()})
    return Response({"data": serializer.data}, status=status.HTTP_200_OK)


@api_view(["POST"])
@permission_classes([CanManageExit])
def validate_exit(request, seizureId):
    """
    POST /api/v1/seizures/{seizureId}/validate-exit

    Authorize the vehicle's exit.
    """
    seizure = services.validate_exit(seizureId, request.user.id)
    return Response(
        {"data": SeizureDetailSerializer(seizure).data}, status=status.HTTP_200_OK
    )


@api_view(["POST"])
@permission_classes([CanManageExit])
def cancel_seizure(request, seizureId):
    """
    POST /api/v1/seizures/{seizureId}/cancel

    Cancel the seizure.
    """
    seizure = services.cancel_seizure(seizureId, request.user.id)
    return Response(
        {"data": SeizureDetailSerializer(seizure).data}, status=status.HTTP_200_OK
    )


@api_view(["GET"])
@permission_classes([CanViewSeizures])
def seizure_notification(request, seizureId):
    """
    GET /api/v1/seizures/{seizureId}/notification

    Read-only payload for the printed seizure notice.
    """
    seizure = _get_seizure(seizureId)
    serializer = SeizureNotificationSerializer(
        seizure, context={"now": timezone.now()}
    )
    return Response({"data": serializer.data}, status=status.HTTP_200_OK)


@api_view(["GET"])
@permission_classes([CanViewSeizures])
def dashboard(request):
    """
    GET /api/v1/dashboard

    KPI summary, cached until the next seizure mutation.
    """
    payload = view_cache.get_or_build_dashboard(reports.build_dashboard)
    return Response({"data": payload}, status=status.HTTP_200_OK)


@api_view(["GET"])
@permission_classes([CanViewReports])
def yearly_report(request):
    """
    GET /api/v1/reports?year=YYYY

    Totals, reason breakdown and top agents for a year.
    """
    year = _parse_year(request)
    return Response({"data": reports.yearly_report(year)}, status=status.HTTP_200_OK)


@api_view(["GET"])
@permission_classes([CanViewReports])
def export_report(request):
    """
    GET /api/v1/reports/export?year=YYYY

    Flat rows for the yearly export document.
    """
    year = _parse_year(request)
    logger.info(
        "report_exported",
        extra={"operation": "EXPORT_REPORT", "actor_id": str(request.user.id)},
    )
    return Response(
        {"data": {"year": year, "rows": reports.export_rows(year)}},
        status=status.HTTP_200_OK,
    )
