"""Rule-based lead scoring.

:func:`calculate_lead_score` adds seven independent factors and clamps the
sum to 0-100:

========== ======= ==========================================
factor     range   signal
========== ======= ==========================================
response   0..25   minutes until the agent's first reply
engagement 0..20   messages exchanged, both directions
visit      -10..20 won deal, booked visit, or missed visit
budget     0..15   budget against the property under discussion
recency    0..10   hours since the most recent activity
source     0..10   acquisition channel quality
penalties  <= 0    stale with zero messages, closed_lost
========== ======= ==========================================

All functions are pure.  Missing optional data contributes zero.
"""

from __future__ import annotations

from datetime import datetime, timezone

from proplead.models import LeadSnapshot, LeadStatus, ScoringBreakdown, ScoringInput, as_utc
from proplead.scoring.quick import clamp_score, source_points
from proplead.scoring.rules import DEFAULT_RULES, ScoringRules

_SECONDS_PER_HOUR = 3_600
_SECONDS_PER_DAY = 86_400


def response_score(
    first_response_time_minutes: float | None, rules: ScoringRules = DEFAULT_RULES,
) -> int:
    if first_response_time_minutes is None:
        return 0
    for max_minutes, points in rules.response_bands:
        if first_response_time_minutes <= max_minutes:
            return points
    return 0


def engagement_score(message_count: int, rules: ScoringRules = DEFAULT_RULES) -> int:
    for min_messages, points in rules.engagement_bands:
        if message_count >= min_messages:
            return points
    return 0


def visit_score(
    lead: LeadSnapshot, now: datetime, rules: ScoringRules = DEFAULT_RULES,
) -> int:
    """Status first, then the booked visit date.

    A visit date in the past while the status is neither ``visit_scheduled``
    nor ``closed_won`` is read as a missed visit.
    """
    if lead.status == LeadStatus.CLOSED_WON:
        return rules.closed_won_visit_points
    if lead.status == LeadStatus.VISIT_SCHEDULED:
        return rules.scheduled_visit_points
    if lead.visit_scheduled_at is not None:
        if lead.visit_scheduled_at < now:
            return rules.missed_visit_points
        return rules.scheduled_visit_points
    return 0


def budget_score(
    budget: float | None,
    target_property_price: float | None,
    rules: ScoringRules = DEFAULT_RULES,
) -> int:
    if not budget:
        return 0
    if not target_property_price or target_property_price <= 0:
        return rules.budget_only_points
    match_percent = budget / target_property_price * 100
    for min_percent, points in rules.budget_bands:
        if match_percent >= min_percent:
            return points
    return 0


def most_recent_activity(lead: LeadSnapshot) -> datetime | None:
    """First of last interaction, last update, creation that is set."""
    return lead.last_interaction_at or lead.updated_at or lead.created_at


def recency_score(
    last_activity: datetime | None, now: datetime, rules: ScoringRules = DEFAULT_RULES,
) -> int:
    if last_activity is None:
        return 0
    hours = (now - last_activity).total_seconds() / _SECONDS_PER_HOUR
    for max_hours, points in rules.recency_bands:
        if hours <= max_hours:
            return points
    return 0


def penalty_score(
    lead: LeadSnapshot,
    last_activity: datetime | None,
    message_count: int,
    now: datetime,
    rules: ScoringRules = DEFAULT_RULES,
) -> int:
    """Stale-silence and lost-deal penalties.  Both can apply at once."""
    penalties = 0
    if last_activity is not None and message_count == 0:
        days = (now - last_activity).total_seconds() / _SECONDS_PER_DAY
        for min_days, points in rules.stale_penalties:
            if days >= min_days:
                penalties += points
                break
    if lead.status == LeadStatus.CLOSED_LOST:
        penalties += rules.closed_lost_penalty
    return penalties


def calculate_lead_score(
    scoring_input: ScoringInput,
    *,
    now: datetime | None = None,
    rules: ScoringRules = DEFAULT_RULES,
) -> ScoringBreakdown:
    """Score a lead from its snapshot and engagement figures.

    *now* defaults to the current UTC time; pass it explicitly for
    reproducible results.  A naive *now* is read as UTC, like stored
    timestamps.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    now = as_utc(now)
    lead = scoring_input.lead
    last_activity = most_recent_activity(lead)

    response = response_score(scoring_input.first_response_time_minutes, rules)
    engagement = engagement_score(scoring_input.message_count, rules)
    visit = visit_score(lead, now, rules)
    budget = budget_score(lead.budget, scoring_input.target_property_price, rules)
    recency = recency_score(last_activity, now, rules)
    source = source_points(lead.source, rules)
    penalties = penalty_score(lead, last_activity, scoring_input.message_count, now, rules)

    total = response + engagement + visit + budget + recency + source + penalties
    return ScoringBreakdown(
        response_score=response,
        engagement_score=engagement,
        visit_score=visit,
        budget_score=budget,
        recency_score=recency,
        source_score=source,
        penalties=penalties,
        total_score=clamp_score(total),
    )
