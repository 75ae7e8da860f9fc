"""
Legal holding deadline (Article 296): 90 days from the seizure timestamp.

Pure functions over (seized_at, now). No I/O, total over any timestamp:
a seizure timestamp in the future yields a negative elapsed day count and
the NORMAL level.

Alert tiers, by whole days elapsed:
    [0, 75)   NORMAL
    [75, 90)  WARNING
    [90, inf) CRITICAL
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

LEGAL_LIMIT_DAYS = 90
WARNING_THRESHOLD_DAYS = 75
SECONDS_PER_DAY = 86400


class AlertLevel:
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


def days_since(seized_at: datetime, now: datetime) -> int:
    """Whole days elapsed since the seizure, floored on the day boundary."""
    elapsed = (now - seized_at).total_seconds()
    return math.floor(elapsed / SECONDS_PER_DAY)


def days_remaining(seized_at: datetime, now: datetime) -> int:
    """Days left before the legal deadline; negative once it has passed."""
    return LEGAL_LIMIT_DAYS - days_since(seized_at, now)


def alert_level(seized_at: datetime, now: datetime) -> str:
    elapsed = days_since(seized_at, now)

    if elapsed >= LEGAL_LIMIT_DAYS:
        return AlertLevel.CRITICAL

    if elapsed >= WARNING_THRESHOLD_DAYS:
        return AlertLevel.WARNING

    return AlertLevel.NORMAL


def alert_message(seized_at: datetime, now: datetime) -> str:
    elapsed = days_since(seized_at, now)

    if elapsed >= LEGAL_LIMIT_DAYS:
        return f"Délai dépassé - {elapsed - LEGAL_LIMIT_DAYS} jour(s) en retard"

    return f"{LEGAL_LIMIT_DAYS - elapsed} jour(s) restant(s)"


def deadline_date(seized_at: datetime) -> datetime:
    return seized_at + timedelta(days=LEGAL_LIMIT_DAYS)


def is_overdue(seized_at: datetime, now: datetime) -> bool:
    return days_since(seized_at, now) >= LEGAL_LIMIT_DAYS


@dataclass(frozen=True)
class DeadlineStatus:
    days_since: int
    days_remaining: int
    level: str
    message: str
    deadline: datetime

    def as_dict(self):
        return {
            "daysSince": self.days_since,
            "daysRemaining": self.days_remaining,
            "alertLevel": self.level,
            "alertMessage": self.message,
            "deadline": self.deadline.isoformat(),
        }


def deadline_status(seized_at: datetime, now: datetime) -> DeadlineStatus:
    """Snapshot of every deadline figure for one seizure at ``now``."""
    return DeadlineStatus(
        days_since=days_since(seized_at, now),
        days_remaining=days_remaining(seized_at, now),
        level=alert_level(seized_at, now),
        message=alert_message(seized_at, now),
        deadline=deadline_date(seized_at),
    )
