"""Tests for proplead.scoring.quick."""

from __future__ import annotations

import pytest

from conftest import make_lead
from proplead.models import LeadPriority, LeadSource
from proplead.scoring.quick import (
    calculate_initial_score,
    clamp_score,
    create_scoring_input,
    get_lead_priority,
    source_points,
)
from proplead.scoring.rules import SOURCE_SCORES, rules_from_mapping


class TestGetLeadPriority:
    @pytest.mark.parametrize(
        "score, expected",
        [
            (0, LeadPriority.COLD),
            (49, LeadPriority.COLD),
            (49.99, LeadPriority.COLD),
            (50, LeadPriority.WARM),
            (79, LeadPriority.WARM),
            (80, LeadPriority.HOT),
            (100, LeadPriority.HOT),
        ],
    )
    def test_boundaries(self, score, expected):
        assert get_lead_priority(score) == expected

    def test_non_decreasing(self):
        rank = {LeadPriority.COLD: 0, LeadPriority.WARM: 1, LeadPriority.HOT: 2}
        tiers = [rank[get_lead_priority(s)] for s in range(0, 101)]
        assert tiers == sorted(tiers)

    def test_string_values(self):
        assert get_lead_priority(85).value == "HOT"
        assert get_lead_priority(85) == "HOT"


class TestClampScore:
    @pytest.mark.parametrize("value, expected", [(-75, 0), (0, 0), (64, 64), (100, 100), (130, 100)])
    def test_cases(self, value, expected):
        assert clamp_score(value) == expected


class TestSourcePoints:
    @pytest.mark.parametrize(
        "source, expected",
        [
            ("website", 10),
            ("whatsapp", 8),
            ("portal", 6),
            ("facebook", 5),
            ("walk-in", 4),
            ("csv", 3),
            ("manual", 2),
        ],
    )
    def test_lookup(self, source, expected):
        assert source_points(source) == expected
        assert source_points(LeadSource(source)) == expected

    def test_unknown_source_scores_zero(self):
        assert source_points("carrier_pigeon") == 0


class TestCalculateInitialScore:
    def test_website_with_budget(self):
        assert calculate_initial_score("website", True) == 25

    def test_manual_without_budget(self):
        assert calculate_initial_score(LeadSource.MANUAL, False) == 12

    def test_walk_in_with_budget(self):
        assert calculate_initial_score(LeadSource.WALK_IN, True) == 19

    def test_unknown_source_gets_bonus_only(self):
        assert calculate_initial_score("carrier_pigeon", False) == 10

    def test_never_below_source_base(self):
        for source, base in SOURCE_SCORES.items():
            for has_budget in (True, False):
                assert calculate_initial_score(source, has_budget) >= base

    def test_capped_at_100(self):
        rules = rules_from_mapping({"new_lead_bonus": 200})
        assert calculate_initial_score("website", True, rules=rules) == 100

    def test_new_leads_start_cold(self):
        for source in LeadSource:
            score = calculate_initial_score(source, True)
            assert get_lead_priority(score) == LeadPriority.COLD


class TestCreateScoringInput:
    def test_explicit_figures(self):
        lead = make_lead(message_count=9, first_response_time=500)
        scoring_input = create_scoring_input(lead, 2, 15, 4_000_000)
        assert scoring_input.lead is lead
        assert scoring_input.message_count == 2
        assert scoring_input.first_response_time_minutes == 15
        assert scoring_input.target_property_price == 4_000_000

    def test_falls_back_to_cached_counters(self):
        lead = make_lead(message_count=4, first_response_time=45)
        scoring_input = create_scoring_input(lead)
        assert scoring_input.message_count == 4
        assert scoring_input.first_response_time_minutes == 45
        assert scoring_input.target_property_price is None

    def test_no_counters_means_zero_messages(self):
        scoring_input = create_scoring_input(make_lead())
        assert scoring_input.message_count == 0
        assert scoring_input.first_response_time_minutes is None
