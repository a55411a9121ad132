"""Lead, task, and scoring types shared by the scoring engine and its callers."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class LeadSource(str, Enum):
    WEBSITE = "website"
    WHATSAPP = "whatsapp"
    PORTAL = "portal"
    MANUAL = "manual"
    CSV = "csv"
    FACEBOOK = "facebook"
    WALK_IN = "walk-in"


class LeadStatus(str, Enum):
    NEW = "new"
    CONTACTED = "contacted"
    VISIT_SCHEDULED = "visit_scheduled"
    NEGOTIATION = "negotiation"
    CLOSED_WON = "closed_won"
    CLOSED_LOST = "closed_lost"


# Kanban column order.
LEAD_STATUS_ORDER: tuple[LeadStatus, ...] = tuple(LeadStatus)


class LeadPriority(str, Enum):
    HOT = "HOT"
    WARM = "WARM"
    COLD = "COLD"


class TaskType(str, Enum):
    CALL = "call"
    VISIT = "visit"
    FOLLOWUP = "followup"
    OTHER = "other"


class TaskStatus(str, Enum):
    PENDING = "pending"
    DONE = "done"
    CANCELLED = "cancelled"


def as_utc(value: datetime | None) -> datetime | None:
    """Naive timestamps from the store are UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class _StoreModel(BaseModel):
    """Documents read from the lead store carry fields we don't model."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)


class LeadSnapshot(_StoreModel):
    """Read-only view of a lead record as the scoring engine sees it.

    ``lead_priority`` is computed from ``lead_score`` and cannot be set on
    its own; any ``lead_priority`` key in the source document is ignored.
    ``message_count`` and ``first_response_time`` (minutes) are the cached
    engagement figures the lead document carries; callers with fresher
    numbers from the messaging store pass those instead.
    """

    id: str = ""
    name: str = ""
    phone: str = ""
    source: LeadSource = LeadSource.MANUAL
    status: LeadStatus = LeadStatus.NEW
    budget: float | None = Field(default=None, ge=0)
    location: str | None = None
    visit_scheduled_at: datetime | None = None
    last_interaction_at: datetime | None = None
    updated_at: datetime | None = None
    created_at: datetime | None = None
    message_count: int | None = Field(default=None, ge=0)
    first_response_time: float | None = Field(default=None, ge=0)
    lead_score: int = Field(default=0, ge=0, le=100)

    @field_validator(
        "visit_scheduled_at", "last_interaction_at", "updated_at", "created_at",
    )
    @classmethod
    def normalize_timezone(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def lead_priority(self) -> LeadPriority:
        from proplead.scoring.quick import get_lead_priority

        return get_lead_priority(self.lead_score)

    @property
    def has_budget(self) -> bool:
        return bool(self.budget)

    def with_score(self, score: int) -> LeadSnapshot:
        """Return a copy carrying *score* as its cached ``lead_score``."""
        return self.model_copy(update={"lead_score": score})


class Task(_StoreModel):
    """A reminder attached to a lead (call, visit, follow-up)."""

    id: str = ""
    lead_id: str
    type: TaskType = TaskType.OTHER
    status: TaskStatus = TaskStatus.PENDING
    title: str = ""
    due_date: datetime

    @field_validator("due_date")
    @classmethod
    def normalize_timezone(cls, value: datetime) -> datetime:
        return as_utc(value)


@dataclass(frozen=True)
class ScoringInput:
    """Transient bundle assembled by the caller for one scoring request."""

    lead: LeadSnapshot
    message_count: int = 0
    first_response_time_minutes: float | None = None
    target_property_price: float | None = None


@dataclass(frozen=True)
class ScoringBreakdown:
    """Per-factor result of :func:`~proplead.scoring.engine.calculate_lead_score`.

    ``priority`` is always derived from ``total_score``.
    """

    response_score: int
    engagement_score: int
    visit_score: int
    budget_score: int
    recency_score: int
    source_score: int
    penalties: int
    total_score: int

    @property
    def priority(self) -> LeadPriority:
        from proplead.scoring.quick import get_lead_priority

        return get_lead_priority(self.total_score)

    @property
    def raw_total(self) -> int:
        """Sum of every sub-score before clamping."""
        return (
            self.response_score
            + self.engagement_score
            + self.visit_score
            + self.budget_score
            + self.recency_score
            + self.source_score
            + self.penalties
        )

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = asdict(self)
        payload["priority"] = self.priority.value
        return payload
