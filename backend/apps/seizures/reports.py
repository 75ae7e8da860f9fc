"""
Read-only aggregates: dashboard KPIs and yearly reports.

Nothing here mutates state. Deadline thresholds come from the alert engine
so the counts agree with the per-seizure alert levels.
"""

from datetime import timedelta

from django.db.models import Count
from django.db.models.functions import ExtractYear
from django.utils import timezone

from apps.seizures.deadlines import LEGAL_LIMIT_DAYS, WARNING_THRESHOLD_DAYS
from apps.seizures.models import Seizure, SeizureStatus
from apps.seizures.serializers import SeizureListSerializer

RECENT_LIMIT = 5
TOP_AGENTS_LIMIT = 10

# (substrings matched on the first three lowercased words, group label)
REASON_GROUPS = (
    (("défaut", "defaut"), "Défaut de T1"),
    (("contrebande", "contre"), "Contrebande"),
    (("falsification", "faux"), "Falsification de documents"),
    (("non paiement",), "Non paiement de droits"),
)


def overdue_queryset(queryset=None, now=None):
    """Seizures with at least LEGAL_LIMIT_DAYS whole days elapsed."""
    if queryset is None:
        queryset = Seizure.objects.all()
    now = now or timezone.now()
    return queryset.filter(seized_at__lte=now - timedelta(days=LEGAL_LIMIT_DAYS))


def warning_queryset(queryset=None, now=None):
    """Seizures in the [WARNING_THRESHOLD_DAYS, LEGAL_LIMIT_DAYS) window."""
    if queryset is None:
        queryset = Seizure.objects.all()
    now = now or timezone.now()
    return queryset.filter(
        seized_at__lte=now - timedelta(days=WARNING_THRESHOLD_DAYS),
        seized_at__gt=now - timedelta(days=LEGAL_LIMIT_DAYS),
    )


def build_dashboard(now=None):
    """KPI summary for the landing page. Returns plain data, cache-friendly."""
    now = now or timezone.now()
    local_now = timezone.localtime(now)
    month_start = local_now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    recent = Seizure.objects.select_related("agent").order_by("-seized_at")[
        :RECENT_LIMIT
    ]

    return {
        "inProgressCount": Seizure.objects.filter(
            status=SeizureStatus.IN_PROGRESS
        ).count(),
        "monthCount": Seizure.objects.filter(seized_at__gte=month_start).count(),
        "overdueCount": overdue_queryset(now=now).count(),
        "warningCount": warning_queryset(now=now).count(),
        "recent": SeizureListSerializer(
            recent, many=True, context={"now": now}
        ).data,
    }


def normalize_reason(reason):
    """Group free-form reason texts under a stable report label."""
    words = (reason or "").split()
    head = " ".join(words[:3]).lower()

    for needles, label in REASON_GROUPS:
        if any(needle in head for needle in needles):
            return label

    return " ".join(words[:3]) or "Autre"


def _year_queryset(year):
    return Seizure.objects.filter(seized_at__year=year)


def available_years(now=None):
    """Distinct seizure years plus the current one, most recent first."""
    now = now or timezone.now()
    years = set(
        Seizure.objects.annotate(year=ExtractYear("seized_at"))
        .order_by()
        .values_list("year", flat=True)
        .distinct()
    )
    years.add(timezone.localtime(now).year)
    return sorted(years, reverse=True)


def yearly_report(year):
    """Totals, reason breakdown and top agents for one calendar year."""
    queryset = _year_queryset(year)

    reason_counts = {}
    for reason in queryset.values_list("infraction_reason", flat=True):
        label = normalize_reason(reason)
        reason_counts[label] = reason_counts.get(label, 0) + 1

    by_reason = [
        {"reason": label, "count": count}
        for label, count in sorted(
            reason_counts.items(), key=lambda item: (-item[1], item[0])
        )
    ]

    agent_rows = (
        queryset.values(
            "agent_id", "agent__first_name", "agent__last_name", "agent__role"
        )
        .annotate(count=Count("id"))
        .order_by("-count", "agent__last_name")[:TOP_AGENTS_LIMIT]
    )
    top_agents = [
        {
            "agentId": str(row["agent_id"]),
            "agent": f"{row['agent__first_name']} {row['agent__last_name']}".strip(),
            "role": row["agent__role"],
            "count": row["count"],
        }
        for row in agent_rows
    ]

    return {
        "year": year,
        "total": queryset.count(),
        "byReason": by_reason,
        "topAgents": top_agents,
        "availableYears": available_years(),
    }


def export_rows(year):
    """Rows for the yearly export document, most recent seizure first."""
    rows = _year_queryset(year).order_by("-seized_at")
    return [
        {
            "chassisNumber": seizure.chassis_number,
            "make": seizure.make,
            "model": seizure.model,
            "seizedAt": seizure.seized_at.isoformat(),
            "status": seizure.status,
        }
        for seizure in rows
    ]
