"""CLI handlers for ``proplead queue`` and ``proplead stats``."""

from __future__ import annotations

import json
from argparse import Namespace

from proplead.cli.common import read_leads, resolve_now
from proplead.queue import build_call_queue
from proplead.report import format_queue, format_stats
from proplead.stats import compute_dashboard_stats


def run_queue(args: Namespace) -> None:
    now = resolve_now(args.now)
    lead_file = read_leads(args.lead_file)
    print(format_queue(build_call_queue(lead_file.leads, lead_file.tasks, now=now)))


def run_stats(args: Namespace) -> None:
    now = resolve_now(args.now)
    lead_file = read_leads(args.lead_file)
    stats = compute_dashboard_stats(lead_file.leads, lead_file.tasks, now=now)
    if args.json:
        print(json.dumps(stats.as_dict(), indent=2))
    else:
        print(format_stats(stats))
