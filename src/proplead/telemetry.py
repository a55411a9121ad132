"""Scoring events and the sinks that receive them.

``LeadScorer`` reports two events: :data:`INITIAL_SCORE` when a new lead
gets its creation-time score, and :data:`RESCORED` after each full
recompute.  Sinks only observe; storing the cached score is the caller's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol, runtime_checkable

INITIAL_SCORE = "lead_initial_score"
RESCORED = "lead_rescored"


@dataclass(frozen=True)
class TelemetryEvent:
    """One scoring event.

    ``lead_id`` is empty for creation-time scores, which run before the
    store has assigned an id.
    """

    name: str
    lead_id: str = ""
    attributes: dict[str, Any] = field(default_factory=dict)
    emitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def priority_changed(self) -> bool:
        before = self.attributes.get("previous_priority")
        after = self.attributes.get("priority")
        return before is not None and after is not None and before != after


@runtime_checkable
class TelemetrySink(Protocol):
    def emit(self, event: TelemetryEvent) -> None:
        """Receive one event.  Exceptions are logged by the caller and dropped."""
        raise NotImplementedError


class NoOpTelemetrySink:
    """Default sink that records nothing."""

    def emit(self, event: TelemetryEvent) -> None:
        _ = event


class InMemoryTelemetrySink:
    """Keeps every event; handy in tests and for batch summaries."""

    def __init__(self) -> None:
        self.events: list[TelemetryEvent] = []

    def emit(self, event: TelemetryEvent) -> None:
        self.events.append(event)

    def named(self, name: str) -> list[TelemetryEvent]:
        return [e for e in self.events if e.name == name]

    def score_changes(self) -> list[tuple[str, int, int]]:
        """``(lead_id, previous, new)`` for each rescore that moved the score."""
        changes = []
        for event in self.named(RESCORED):
            before = event.attributes.get("previous_score")
            after = event.attributes.get("total_score")
            if before != after:
                changes.append((event.lead_id, before, after))
        return changes


class LoggerTelemetrySink:
    """Writes events to Python logging.

    A rescore that moves a lead to another priority tier is logged at INFO;
    everything else at DEBUG.  The raw event rides along in ``extra``.
    """

    def __init__(self, logger_name: str = "proplead.telemetry") -> None:
        self.logger = logging.getLogger(logger_name)

    def emit(self, event: TelemetryEvent) -> None:
        extra = {
            "event_name": event.name,
            "lead_id": event.lead_id,
            "event_attributes": event.attributes,
        }
        if event.priority_changed:
            self.logger.info(
                "Lead %s moved %s -> %s (score %s)",
                event.lead_id,
                event.attributes["previous_priority"],
                event.attributes["priority"],
                event.attributes.get("total_score"),
                extra=extra,
            )
        else:
            self.logger.debug("%s lead=%s", event.name, event.lead_id or "-", extra=extra)
