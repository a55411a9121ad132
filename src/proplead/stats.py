"""Dashboard figures computed from cached lead fields."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from proplead.models import LeadPriority, LeadSnapshot, LeadStatus, Task, TaskStatus, as_utc

RECENT_LEADS_LIMIT = 5
_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class DashboardStats:
    total_leads: int = 0
    hot_leads: int = 0
    warm_leads: int = 0
    cold_leads: int = 0
    followups_due_today: int = 0
    conversion_rate: float = 0.0
    leads_by_source: dict[str, int] = field(default_factory=dict)
    leads_by_status: dict[str, int] = field(default_factory=dict)
    recent_leads: list[LeadSnapshot] = field(default_factory=list)
    due_tasks: list[Task] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {
            "total_leads": self.total_leads,
            "hot_leads": self.hot_leads,
            "warm_leads": self.warm_leads,
            "cold_leads": self.cold_leads,
            "followups_due_today": self.followups_due_today,
            "conversion_rate": self.conversion_rate,
            "leads_by_source": self.leads_by_source,
            "leads_by_status": self.leads_by_status,
            "recent_leads": [lead.model_dump(mode="json") for lead in self.recent_leads],
            "due_tasks": [task.model_dump(mode="json") for task in self.due_tasks],
        }


def compute_dashboard_stats(
    leads: Iterable[LeadSnapshot],
    tasks: Iterable[Task] = (),
    *,
    now: datetime | None = None,
) -> DashboardStats:
    """Aggregate tier counts, pipeline counts, and today's follow-ups.

    "Today" is the UTC calendar day containing *now*.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    now = as_utc(now)
    leads = list(leads)

    priorities = Counter(lead.lead_priority for lead in leads)
    closed_won = sum(1 for lead in leads if lead.status == LeadStatus.CLOSED_WON)
    total = len(leads)
    conversion = round(closed_won / total * 100, 2) if total else 0.0

    day = now.astimezone(timezone.utc)
    start_of_day = day.replace(hour=0, minute=0, second=0, microsecond=0)
    end_of_day = start_of_day + timedelta(days=1)
    due_tasks = [
        task for task in tasks
        if task.status == TaskStatus.PENDING and start_of_day <= task.due_date < end_of_day
    ]

    newest_first = sorted(leads, key=lambda lead: lead.created_at or _EPOCH, reverse=True)

    return DashboardStats(
        total_leads=total,
        hot_leads=priorities[LeadPriority.HOT],
        warm_leads=priorities[LeadPriority.WARM],
        cold_leads=priorities[LeadPriority.COLD],
        followups_due_today=len(due_tasks),
        conversion_rate=conversion,
        leads_by_source=dict(Counter(lead.source.value for lead in leads)),
        leads_by_status=dict(Counter(lead.status.value for lead in leads)),
        recent_leads=newest_first[:RECENT_LEADS_LIMIT],
        due_tasks=due_tasks,
    )
