from django.conf import settings
from django.http import JsonResponse
from django.db import connection


def health_check(request):
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        return JsonResponse(
            {
                "status": "ok",
                "database": "connected",
                "version": settings.APP_VERSION,
            },
            status=200,
        )
    except Exception:
        return JsonResponse(
            {
                "status": "unhealthy",
                "database": "disconnected",
                "version": settings.APP_VERSION,
            },
            status=503,
        )
