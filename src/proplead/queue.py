"""Ordering leads for agent attention: priority sort, kanban, call queue.

Everything here reads the cached ``lead_score``/``lead_priority`` on each
lead.  Nothing rescores.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

from proplead.models import (
    LEAD_STATUS_ORDER,
    LeadPriority,
    LeadSnapshot,
    LeadStatus,
    Task,
    TaskStatus,
    TaskType,
    as_utc,
)

_PRIORITY_RANK = {LeadPriority.HOT: 0, LeadPriority.WARM: 1, LeadPriority.COLD: 2}
_STALE_HOT_LEAD = timedelta(hours=24)


class CallUrgency(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


_URGENCY_RANK = {CallUrgency.HIGH: 0, CallUrgency.MEDIUM: 1, CallUrgency.LOW: 2}


@dataclass(frozen=True)
class CallQueueItem:
    lead: LeadSnapshot
    urgency: CallUrgency
    reason: str
    task: Task | None = None


def sort_by_priority(leads: Iterable[LeadSnapshot]) -> list[LeadSnapshot]:
    """HOT first, then WARM, then COLD; higher cached score first within a tier."""
    return sorted(leads, key=lambda lead: (_PRIORITY_RANK[lead.lead_priority], -lead.lead_score))


def group_for_kanban(
    leads: Iterable[LeadSnapshot],
) -> dict[LeadStatus, list[LeadSnapshot]]:
    """One column per pipeline stage, in pipeline order, each sorted by priority."""
    columns: dict[LeadStatus, list[LeadSnapshot]] = {status: [] for status in LEAD_STATUS_ORDER}
    for lead in leads:
        columns[lead.status].append(lead)
    return {status: sort_by_priority(column) for status, column in columns.items()}


def _same_day(moment: datetime, now: datetime) -> bool:
    return moment.astimezone(now.tzinfo).date() == now.date()


def build_call_queue(
    leads: Iterable[LeadSnapshot],
    tasks: Iterable[Task],
    *,
    now: datetime | None = None,
) -> list[CallQueueItem]:
    """Build today's telecalling queue.

    1. Pending call/follow-up tasks due today (high).
    2. HOT leads with no interaction in the last 24 hours (high).
    3. Leads still in ``new`` status (medium).

    A lead appears at most once: its first due task wins, and a lead queued
    by an earlier rule is not added again by a later one.  Leads are told
    apart by position, since ids may be missing.  The result is stably
    sorted by urgency.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    now = as_utc(now)
    leads = list(leads)
    by_id = {lead.id: i for i, lead in enumerate(leads) if lead.id}
    queue: list[CallQueueItem] = []
    queued: set[int] = set()

    for task in tasks:
        if task.status != TaskStatus.PENDING:
            continue
        if task.type not in (TaskType.CALL, TaskType.FOLLOWUP):
            continue
        if not _same_day(task.due_date, now):
            continue
        index = by_id.get(task.lead_id)
        if index is None or index in queued:
            continue
        lead = leads[index]
        label = "Call" if task.type == TaskType.CALL else "Follow-up"
        queue.append(CallQueueItem(
            lead=lead, urgency=CallUrgency.HIGH,
            reason=f"{label} scheduled for today", task=task,
        ))
        queued.add(index)

    for index, lead in enumerate(leads):
        if lead.lead_priority != LeadPriority.HOT or index in queued:
            continue
        last_contact = lead.last_interaction_at
        if last_contact is None or now - last_contact > _STALE_HOT_LEAD:
            queue.append(CallQueueItem(
                lead=lead, urgency=CallUrgency.HIGH,
                reason="Hot lead - no contact in 24+ hours",
            ))
            queued.add(index)

    for index, lead in enumerate(leads):
        if lead.status != LeadStatus.NEW or index in queued:
            continue
        queue.append(CallQueueItem(
            lead=lead, urgency=CallUrgency.MEDIUM,
            reason="New lead - needs first contact",
        ))
        queued.add(index)

    return sorted(queue, key=lambda item: _URGENCY_RANK[item.urgency])
