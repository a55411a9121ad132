"""Test fixtures for PropLead scoring tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from proplead.models import LeadSnapshot, ScoringInput, Task

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def now() -> datetime:
    return NOW


def hours_ago(hours: float) -> datetime:
    return NOW - timedelta(hours=hours)


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


def make_lead(**overrides: Any) -> LeadSnapshot:
    """Create a minimal lead that was active just now."""
    fields: dict[str, Any] = {
        "id": "lead-1",
        "name": "Rahul Sharma",
        "phone": "+919876543001",
        "source": "manual",
        "status": "new",
        "last_interaction_at": NOW,
        "created_at": days_ago(1),
    }
    fields.update(overrides)
    return LeadSnapshot(**fields)


def make_input(
    lead: LeadSnapshot | None = None,
    *,
    message_count: int = 0,
    first_response_time_minutes: float | None = None,
    target_property_price: float | None = None,
    **lead_overrides: Any,
) -> ScoringInput:
    """Create a scoring input around ``make_lead(**lead_overrides)``."""
    return ScoringInput(
        lead=lead if lead is not None else make_lead(**lead_overrides),
        message_count=message_count,
        first_response_time_minutes=first_response_time_minutes,
        target_property_price=target_property_price,
    )


def make_task(**overrides: Any) -> Task:
    fields: dict[str, Any] = {
        "id": "task-1",
        "lead_id": "lead-1",
        "type": "call",
        "status": "pending",
        "title": "Call back",
        "due_date": NOW + timedelta(hours=2),
    }
    fields.update(overrides)
    return Task(**fields)
