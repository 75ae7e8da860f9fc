from django.contrib import admin
from django.urls import include, path

from .health import health_check

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/health/", health_check),
    path("health/", include("health.urls")),
    path("api/v1/", include("apps.auth.urls")),
    path("api/v1/", include("apps.users.urls")),
    path("api/v1/", include("apps.audit.urls")),
    path("api/v1/", include("apps.seizures.urls")),
]
