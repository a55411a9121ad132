"""Creation-time scoring and priority tiers.

A brand-new lead has no messages, visits, or response time yet, so it gets
a deliberately simpler score than :func:`~proplead.scoring.engine.calculate_lead_score`.
"""

from __future__ import annotations

from proplead.models import LeadPriority, LeadSnapshot, LeadSource, ScoringInput
from proplead.scoring.rules import DEFAULT_RULES, ScoringRules

MIN_SCORE = 0
MAX_SCORE = 100
HOT_THRESHOLD = 80
WARM_THRESHOLD = 50


def clamp_score(value: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def source_points(source: LeadSource | str, rules: ScoringRules = DEFAULT_RULES) -> int:
    """Fixed channel-quality points.  Unrecognized channels earn nothing."""
    try:
        return rules.source_scores.get(LeadSource(source), 0)
    except ValueError:
        return 0


def get_lead_priority(score: float) -> LeadPriority:
    """Map a 0-100 score to its tier: HOT from 80, WARM from 50, else COLD."""
    if score >= HOT_THRESHOLD:
        return LeadPriority.HOT
    if score >= WARM_THRESHOLD:
        return LeadPriority.WARM
    return LeadPriority.COLD


def calculate_initial_score(
    source: LeadSource | str,
    has_budget: bool,
    *,
    rules: ScoringRules = DEFAULT_RULES,
) -> int:
    """Score a lead at creation: channel points, a new-lead bonus, and a budget bonus."""
    score = source_points(source, rules) + rules.new_lead_bonus
    if has_budget:
        score += rules.initial_budget_bonus
    return min(score, MAX_SCORE)


def create_scoring_input(
    lead: LeadSnapshot,
    message_count: int | None = None,
    first_response_time_minutes: float | None = None,
    target_property_price: float | None = None,
) -> ScoringInput:
    """Bundle a lead with its engagement figures.

    Figures not supplied fall back to the counters cached on the lead record.
    """
    if message_count is None:
        message_count = lead.message_count or 0
    if first_response_time_minutes is None:
        first_response_time_minutes = lead.first_response_time
    return ScoringInput(
        lead=lead,
        message_count=message_count,
        first_response_time_minutes=first_response_time_minutes,
        target_property_price=target_property_price,
    )
