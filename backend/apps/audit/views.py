"""
Audit log views - query and export audit log entries.

Read-only - audit logs are append-only. ADMIN only.
"""

from uuid import UUID

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.pagination import LimitOffsetPagination
from django.utils.dateparse import parse_datetime

from core.exceptions import ValidationError
from core.permissions import CanViewAuditLog
from apps.audit.serializers import AuditExportRowSerializer, AuditLogSerializer
from apps.audit.services import filter_audit_entries


def _parse_filters(request):
    """Read and validate audit filters from the query string."""
    seizure_id = request.query_params.get("seizureId")
    from_date = request.query_params.get("fromDate")
    to_date = request.query_params.get("toDate")

    if seizure_id:
        try:
            seizure_id = UUID(seizure_id)
        except ValueError:
            raise ValidationError("Invalid seizureId format")

    if from_date:
        parsed = parse_datetime(from_date)
        if parsed is None:
            raise ValidationError("Invalid fromDate format (use ISO 8601)")
        from_date = parsed

    if to_date:
        parsed = parse_datetime(to_date)
        if parsed is None:
            raise ValidationError("Invalid toDate format (use ISO 8601)")
        to_date = parsed

    return {
        "user": request.query_params.get("user"),
        "action": request.query_params.get("action"),
        "seizure_id": seizure_id or None,
        "from_date": from_date or None,
        "to_date": to_date or None,
    }


@api_view(["GET"])
@permission_classes([CanViewAuditLog])
def query_audit_log(request):
    """
    GET /api/v1/audit

    Query audit log entries with optional filters.
    """
    queryset = filter_audit_entries(**_parse_filters(request))

    paginator = LimitOffsetPagination()
    paginator.default_limit = 50
    paginator.max_limit = 100

    page = paginator.paginate_queryset(queryset, request)
    serializer = AuditLogSerializer(page, many=True)

    return paginator.get_paginated_response(serializer.data)


@api_view(["GET"])
@permission_classes([CanViewAuditLog])
def export_audit_log(request):
    """
    GET /api/v1/audit/export

    All entries matching the filters, unpaginated, for the PDF export.
    """
    queryset = filter_audit_entries(**_parse_filters(request))
    serializer = AuditExportRowSerializer(queryset, many=True)
    return Response({"data": serializer.data}, status=status.HTTP_200_OK)
