"""CLI handlers for ``proplead score`` and ``proplead initial``."""

from __future__ import annotations

from argparse import Namespace

from proplead.cli.common import fail, read_leads, read_rules, resolve_now
from proplead.models import LeadSource
from proplead.parsing import parse_budget
from proplead.report import format_json, format_table
from proplead.service import LeadScorer
from proplead.telemetry import LoggerTelemetrySink


def run_score(args: Namespace) -> None:
    now = resolve_now(args.now)
    scorer = LeadScorer(read_rules(args.rules), telemetry_sink=LoggerTelemetrySink())
    lead_file = read_leads(args.lead_file)
    results = scorer.rescore_many(lead_file.scoring_inputs(), now=now)
    if args.json:
        print(format_json(results))
    else:
        print(format_table(results))


def run_initial(args: Namespace) -> None:
    try:
        source = LeadSource(args.source)
    except ValueError:
        choices = ", ".join(s.value for s in LeadSource)
        fail(f"unknown source {args.source!r} (choose from {choices})")
    budget = parse_budget(args.budget) if args.budget else None
    if args.budget and budget is None:
        fail(f"--budget is not a number: {args.budget!r}")
    fields = LeadScorer(read_rules(args.rules)).initial_fields(source, budget)
    print(f"score: {fields['lead_score']}  priority: {fields['lead_priority']}")
