"""
URL configuration for seizures, dashboard and reports.
"""

from django.urls import path
from apps.seizures import views

app_name = "seizures"

urlpatterns = [
    path("seizures", views.list_or_create_seizures, name="list-or-create"),
    path("seizures/<uuid:seizureId>", views.seizure_detail, name="detail"),
    path(
        "seizures/<uuid:seizureId>/validate-exit",
        views.validate_exit,
        name="validate-exit",
    ),
    path("seizures/<uuid:seizureId>/cancel", views.cancel_seizure, name="cancel"),
    path(
        "seizures/<uuid:seizureId>/notification",
        views.seizure_notification,
        name="notification",
    ),
    path("dashboard", views.dashboard, name="dashboard"),
    path("reports", views.yearly_report, name="reports"),
    path("reports/export", views.export_report, name="reports-export"),
]
