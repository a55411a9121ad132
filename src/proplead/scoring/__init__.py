"""Lead scoring engine: full scorer, creation-time score, priority tiers."""

from proplead.scoring.engine import (
    budget_score,
    calculate_lead_score,
    engagement_score,
    most_recent_activity,
    penalty_score,
    recency_score,
    response_score,
    visit_score,
)
from proplead.scoring.quick import (
    HOT_THRESHOLD,
    MAX_SCORE,
    MIN_SCORE,
    WARM_THRESHOLD,
    calculate_initial_score,
    clamp_score,
    create_scoring_input,
    get_lead_priority,
    source_points,
)
from proplead.scoring.rules import (
    DEFAULT_RULES,
    SOURCE_SCORES,
    ScoringRules,
    rules_from_mapping,
)

__all__ = [
    "DEFAULT_RULES",
    "HOT_THRESHOLD",
    "MAX_SCORE",
    "MIN_SCORE",
    "SOURCE_SCORES",
    "ScoringRules",
    "WARM_THRESHOLD",
    "budget_score",
    "calculate_initial_score",
    "calculate_lead_score",
    "clamp_score",
    "create_scoring_input",
    "engagement_score",
    "get_lead_priority",
    "most_recent_activity",
    "penalty_score",
    "recency_score",
    "response_score",
    "rules_from_mapping",
    "source_points",
    "visit_score",
]
