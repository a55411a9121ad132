"""Scoring weights and thresholds.

Defaults reproduce the production rule set.  :func:`rules_from_mapping`
builds a variant from a mapping of overrides; every instance is frozen.
Priority tier cut-offs are not part of the rules: they live in
:mod:`proplead.scoring.quick` and never change.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from proplead.models import LeadSource

SOURCE_SCORES: Mapping[LeadSource, int] = MappingProxyType({
    LeadSource.WEBSITE: 10,
    LeadSource.WHATSAPP: 8,
    LeadSource.PORTAL: 6,
    LeadSource.FACEBOOK: 5,
    LeadSource.WALK_IN: 4,
    LeadSource.CSV: 3,
    LeadSource.MANUAL: 2,
})


@dataclass(frozen=True)
class ScoringRules:
    """Every weight the scorers read.

    Parameters
    ----------
    source_scores:
        Fixed points per acquisition channel.  Missing channels score 0.
    response_bands:
        Ascending ``(max_minutes, points)`` pairs for first-response time.
    engagement_bands:
        Descending ``(min_messages, points)`` pairs.
    closed_won_visit_points, scheduled_visit_points, missed_visit_points:
        Visit sub-score for a won deal, a booked (or upcoming) visit, and a
        visit date that passed without the status moving on.
    budget_bands:
        Descending ``(min_match_percent, points)`` pairs, where the match is
        ``budget / target_property_price * 100``.
    budget_only_points:
        Partial credit when a budget is known but no target price is.
    recency_bands:
        Ascending ``(max_hours, points)`` pairs since the last activity.
    stale_penalties:
        Descending ``(min_days, points)`` pairs applied only when no
        message has been exchanged.  The first matching pair wins.
    closed_lost_penalty:
        Added on top of everything else for ``closed_lost`` leads.
    new_lead_bonus, initial_budget_bonus:
        Terms of the creation-time initial score.
    """

    source_scores: Mapping[LeadSource, int] = field(default_factory=lambda: SOURCE_SCORES)
    response_bands: tuple[tuple[float, int], ...] = ((60, 25), (360, 20), (1440, 10))
    engagement_bands: tuple[tuple[int, int], ...] = ((5, 20), (3, 15), (1, 5))
    closed_won_visit_points: int = 20
    scheduled_visit_points: int = 15
    missed_visit_points: int = -10
    budget_bands: tuple[tuple[float, int], ...] = ((90, 15), (70, 10), (50, 5))
    budget_only_points: int = 8
    recency_bands: tuple[tuple[float, int], ...] = ((24, 10), (72, 5))
    stale_penalties: tuple[tuple[float, int], ...] = ((10, -25), (5, -15))
    closed_lost_penalty: int = -50
    new_lead_bonus: int = 10
    initial_budget_bonus: int = 5


DEFAULT_RULES = ScoringRules()

# First match wins, so "max" bands must ascend and "min" bands descend.
_ASCENDING_BANDS = frozenset({"response_bands", "recency_bands"})
_DESCENDING_BANDS = frozenset({"engagement_bands", "budget_bands", "stale_penalties"})
_BAND_FIELDS = _ASCENDING_BANDS | _DESCENDING_BANDS
_FIELD_NAMES = frozenset(f.name for f in dataclasses.fields(ScoringRules))


def _parse_bands(key: str, raw: Any) -> tuple[tuple[float, int], ...]:
    if not isinstance(raw, list):
        raise ValueError(f"'{key}' must be a list of [threshold, points] pairs")
    bands: list[tuple[float, int]] = []
    for pair in raw:
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise ValueError(f"'{key}' entries must be [threshold, points] pairs, got {pair!r}")
        threshold, points = pair
        if isinstance(threshold, bool) or isinstance(points, bool):
            raise ValueError(f"'{key}' entries must be numbers, got {pair!r}")
        try:
            bands.append((float(threshold), int(points)))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"'{key}' entries must be numbers, got {pair!r}") from exc
    thresholds = [threshold for threshold, _ in bands]
    if key in _ASCENDING_BANDS:
        ordered = all(a < b for a, b in zip(thresholds, thresholds[1:]))
        direction = "ascending"
    else:
        ordered = all(a > b for a, b in zip(thresholds, thresholds[1:]))
        direction = "descending"
    if not ordered:
        raise ValueError(f"'{key}' thresholds must be strictly {direction}, got {thresholds}")
    return tuple(bands)


def _parse_points(key: str, raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValueError(f"'{key}' must be a whole number, got {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{key}' must be a whole number, got {raw!r}") from exc


def _parse_source_scores(raw: Any, base: Mapping[LeadSource, int]) -> Mapping[LeadSource, int]:
    if not isinstance(raw, dict):
        raise ValueError("'source_scores' must be a mapping of source to points")
    merged = dict(base)
    for name, points in raw.items():
        try:
            source = LeadSource(name)
        except ValueError as exc:
            raise ValueError(f"Unknown lead source in source_scores: {name!r}") from exc
        merged[source] = _parse_points(f"source_scores.{name}", points)
    return MappingProxyType(merged)


def rules_from_mapping(
    overrides: Mapping[str, Any], base: ScoringRules = DEFAULT_RULES,
) -> ScoringRules:
    """Return *base* with *overrides* applied.  Unknown keys are rejected."""
    unknown = sorted(set(overrides) - _FIELD_NAMES)
    if unknown:
        raise ValueError(f"Unknown scoring rule keys: {', '.join(unknown)}")

    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        if key == "source_scores":
            changes[key] = _parse_source_scores(value, base.source_scores)
        elif key in _BAND_FIELDS:
            changes[key] = _parse_bands(key, value)
        else:
            changes[key] = _parse_points(key, value)
    return dataclasses.replace(base, **changes)
