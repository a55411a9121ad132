"""LeadScorer facade for the lead-creation and recompute flows.

The scoring functions are pure; this is where a caller's concerns live:
choosing the rule set, stamping the cached fields it will persist, and
reporting what happened.  Persisting the result stays with the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from proplead.models import LeadPriority, LeadSnapshot, LeadSource, ScoringBreakdown, ScoringInput
from proplead.scoring.engine import calculate_lead_score
from proplead.scoring.quick import calculate_initial_score, get_lead_priority
from proplead.scoring.rules import DEFAULT_RULES, ScoringRules
from proplead.telemetry import (
    INITIAL_SCORE,
    RESCORED,
    NoOpTelemetrySink,
    TelemetryEvent,
    TelemetrySink,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RescoreResult:
    """A fresh breakdown and the lead copy carrying it as its cached score."""

    lead: LeadSnapshot
    breakdown: ScoringBreakdown
    previous_score: int

    @property
    def changed(self) -> bool:
        return self.previous_score != self.breakdown.total_score

    @property
    def previous_priority(self) -> LeadPriority:
        return get_lead_priority(self.previous_score)


class LeadScorer:
    """Single entry point that wires rules and telemetry around the scorers."""

    def __init__(
        self,
        rules: ScoringRules = DEFAULT_RULES,
        *,
        telemetry_sink: TelemetrySink | None = None,
    ) -> None:
        self.rules = rules
        self.telemetry_sink = telemetry_sink or NoOpTelemetrySink()

    def _emit(self, name: str, attributes: dict[str, Any], lead_id: str = "") -> None:
        try:
            self.telemetry_sink.emit(
                TelemetryEvent(name=name, lead_id=lead_id, attributes=attributes)
            )
        except Exception:
            logger.exception("Telemetry sink failed for event %s", name)

    def initial_fields(
        self, source: LeadSource | str, budget: float | None = None,
    ) -> dict[str, Any]:
        """Cached score fields to store on a lead at creation time."""
        score = calculate_initial_score(source, bool(budget), rules=self.rules)
        priority = get_lead_priority(score)
        self._emit(
            INITIAL_SCORE,
            {"source": str(getattr(source, "value", source)), "score": score,
             "priority": priority.value},
        )
        return {"lead_score": score, "lead_priority": priority.value}

    def rescore(
        self, scoring_input: ScoringInput, *, now: datetime | None = None,
    ) -> RescoreResult:
        """Run the full scorer and return the lead with its new cached score."""
        lead = scoring_input.lead
        breakdown = calculate_lead_score(scoring_input, now=now, rules=self.rules)
        result = RescoreResult(
            lead=lead.with_score(breakdown.total_score),
            breakdown=breakdown,
            previous_score=lead.lead_score,
        )
        if result.changed:
            logger.debug(
                "Lead %s score %d -> %d (%s)",
                lead.id, lead.lead_score, breakdown.total_score, breakdown.priority.value,
            )
        self._emit(
            RESCORED,
            {
                "previous_score": lead.lead_score,
                "previous_priority": result.previous_priority.value,
                **breakdown.as_dict(),
            },
            lead_id=lead.id,
        )
        return result

    def rescore_many(
        self, scoring_inputs: list[ScoringInput], *, now: datetime | None = None,
    ) -> list[RescoreResult]:
        """Rescore a batch against one shared *now*."""
        if now is None:
            now = datetime.now(timezone.utc)
        return [self.rescore(item, now=now) for item in scoring_inputs]
