"""Tests for the LeadScorer facade."""

from __future__ import annotations

import logging

from conftest import NOW, days_ago, make_input, make_lead
from proplead.models import LeadPriority, LeadSource
from proplead.scoring.rules import rules_from_mapping
from proplead.service import LeadScorer
from proplead.telemetry import InMemoryTelemetrySink, TelemetryEvent


class _BrokenSink:
    def emit(self, event: TelemetryEvent) -> None:
        raise RuntimeError("sink down")


class TestInitialFields:
    def test_website_with_budget(self):
        fields = LeadScorer().initial_fields(LeadSource.WEBSITE, 5_000_000)
        assert fields == {"lead_score": 25, "lead_priority": "COLD"}

    def test_zero_budget_is_no_budget(self):
        fields = LeadScorer().initial_fields("whatsapp", 0)
        assert fields["lead_score"] == 18

    def test_fields_round_trip_onto_lead(self):
        fields = LeadScorer().initial_fields("portal", None)
        lead = make_lead(**fields)
        assert lead.lead_score == 16
        assert lead.lead_priority == LeadPriority.COLD

    def test_custom_rules(self):
        scorer = LeadScorer(rules_from_mapping({"new_lead_bonus": 75}))
        fields = scorer.initial_fields("website", 1)
        assert fields == {"lead_score": 90, "lead_priority": "HOT"}

    def test_emits_event(self):
        sink = InMemoryTelemetrySink()
        LeadScorer(telemetry_sink=sink).initial_fields("csv")
        (event,) = sink.named("lead_initial_score")
        assert event.attributes == {"source": "csv", "score": 13, "priority": "COLD"}


class TestRescore:
    def test_updates_cached_score(self):
        scoring_input = make_input(
            lead_score=12, status="visit_scheduled", source="website",
            message_count=5, first_response_time_minutes=20,
        )
        result = LeadScorer().rescore(scoring_input, now=NOW)
        # 25 + 20 + 15 visit + 10 recency + 10 source
        assert result.breakdown.total_score == 80
        assert result.lead.lead_score == 80
        assert result.lead.lead_priority == LeadPriority.HOT
        assert result.previous_score == 12
        assert result.previous_priority == LeadPriority.COLD
        assert result.changed is True

    def test_input_lead_untouched(self):
        scoring_input = make_input(lead_score=12)
        LeadScorer().rescore(scoring_input, now=NOW)
        assert scoring_input.lead.lead_score == 12

    def test_unchanged(self):
        scoring_input = make_input(lead_score=12)
        assert LeadScorer().rescore(scoring_input, now=NOW).changed is False

    def test_emits_breakdown(self):
        sink = InMemoryTelemetrySink()
        LeadScorer(telemetry_sink=sink).rescore(make_input(id="lead-9"), now=NOW)
        (event,) = sink.named("lead_rescored")
        assert event.lead_id == "lead-9"
        assert event.attributes["total_score"] == 12
        assert event.attributes["priority"] == "COLD"
        assert event.attributes["previous_score"] == 0
        assert event.attributes["previous_priority"] == "COLD"

    def test_broken_sink_does_not_break_scoring(self, caplog):
        scorer = LeadScorer(telemetry_sink=_BrokenSink())
        with caplog.at_level(logging.ERROR, logger="proplead.service"):
            result = scorer.rescore(make_input(), now=NOW)
        assert result.breakdown.total_score == 12
        assert "Telemetry sink failed" in caplog.text

    def test_rescore_many_shares_now(self):
        inputs = [
            make_input(id="a", source="website"),
            make_input(id="b", source="csv", last_interaction_at=days_ago(12)),
        ]
        results = LeadScorer().rescore_many(inputs, now=NOW)
        assert [r.lead.id for r in results] == ["a", "b"]
        assert [r.breakdown.total_score for r in results] == [20, 0]

    def test_rescore_many_defaults_now(self):
        results = LeadScorer().rescore_many([make_input()])
        assert len(results) == 1
