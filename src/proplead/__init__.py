"""PropLead lead scoring.

Rule-based scoring and prioritization for real-estate leads: a 0-100
score and a HOT/WARM/COLD tier from a lead snapshot plus engagement
figures.

Public API::

    from proplead import calculate_lead_score, calculate_initial_score, get_lead_priority
    from proplead import LeadSnapshot, ScoringInput, LeadScorer
"""

from proplead.models import (
    LeadPriority,
    LeadSnapshot,
    LeadSource,
    LeadStatus,
    ScoringBreakdown,
    ScoringInput,
    Task,
)
from proplead.scoring import (
    DEFAULT_RULES,
    ScoringRules,
    calculate_initial_score,
    calculate_lead_score,
    create_scoring_input,
    get_lead_priority,
)
from proplead.service import LeadScorer, RescoreResult

__all__ = [
    "DEFAULT_RULES",
    "LeadPriority",
    "LeadScorer",
    "LeadSnapshot",
    "LeadSource",
    "LeadStatus",
    "RescoreResult",
    "ScoringBreakdown",
    "ScoringInput",
    "ScoringRules",
    "Task",
    "calculate_initial_score",
    "calculate_lead_score",
    "create_scoring_input",
    "get_lead_priority",
]
__version__ = "0.1.0"
