"""Shared helpers for CLI handlers."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from typing import NoReturn

from proplead.errors import LeadDataError
from proplead.loader import LeadFile, load_lead_file, load_scoring_rules
from proplead.parsing import parse_timestamp
from proplead.scoring.rules import DEFAULT_RULES, ScoringRules


def fail(message: str) -> NoReturn:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def resolve_now(raw: str) -> datetime:
    if not raw:
        return datetime.now(timezone.utc)
    now = parse_timestamp(raw)
    if now is None:
        fail(f"--now is not an ISO-8601 timestamp: {raw!r}")
    return now


def read_leads(path: str) -> LeadFile:
    try:
        return load_lead_file(path)
    except LeadDataError as exc:
        for detail in exc.errors[1:]:
            print(f"  {detail}", file=sys.stderr)
        fail(str(exc))


def read_rules(path: str) -> ScoringRules:
    if not path:
        return DEFAULT_RULES
    try:
        return load_scoring_rules(path)
    except (OSError, ValueError) as exc:
        fail(f"could not load scoring rules from {path}: {exc}")
