"""Output formatters for the CLI: aligned tables and JSON."""

from __future__ import annotations

import json
from typing import Any

from proplead.queue import CallQueueItem
from proplead.service import RescoreResult
from proplead.stats import DashboardStats

_FACTORS = (
    ("Resp", "response_score"),
    ("Eng", "engagement_score"),
    ("Visit", "visit_score"),
    ("Budget", "budget_score"),
    ("Recent", "recency_score"),
    ("Src", "source_score"),
    ("Pen", "penalties"),
)


def _row(cols: list[str], widths: list[int]) -> str:
    return "  ".join(c.ljust(w) for c, w in zip(cols, widths)).rstrip()


def format_table(results: list[RescoreResult]) -> str:
    lines: list[str] = []
    lines.append("Lead Scores")
    lines.append("=" * 88)
    hdr = ["Lead", *[label for label, _ in _FACTORS], "Total", "Priority", "Was"]
    widths = [20, *[6] * len(_FACTORS), 6, 8, 4]
    lines.append(_row(hdr, widths))
    lines.append("-" * 88)
    for r in results:
        b = r.breakdown
        name = (r.lead.name or r.lead.id or "?")[:20]
        lines.append(
            _row(
                [
                    name,
                    *[str(getattr(b, attr)) for _, attr in _FACTORS],
                    str(b.total_score),
                    b.priority.value,
                    str(r.previous_score),
                ],
                widths,
            )
        )
    lines.append("-" * 88)

    tiers = {"HOT": 0, "WARM": 0, "COLD": 0}
    for r in results:
        tiers[r.breakdown.priority.value] += 1
    changed = sum(1 for r in results if r.changed)
    n = len(results)
    lines.append(
        f"{n} lead{'s' if n != 1 else ''}"
        f" | HOT {tiers['HOT']} | WARM {tiers['WARM']} | COLD {tiers['COLD']}"
        f" | changed: {changed}"
    )
    return "\n".join(lines)


def _result_to_dict(r: RescoreResult) -> dict[str, Any]:
    return {
        "lead_id": r.lead.id,
        "name": r.lead.name,
        "previous_score": r.previous_score,
        "breakdown": r.breakdown.as_dict(),
    }


def format_json(results: list[RescoreResult]) -> str:
    return json.dumps({"leads": [_result_to_dict(r) for r in results]}, indent=2)


def format_queue(queue: list[CallQueueItem]) -> str:
    if not queue:
        return "Call queue is empty."
    lines = ["Call Queue", "=" * 72]
    widths = [20, 16, 8, 6, 30]
    lines.append(_row(["Lead", "Phone", "Urgency", "Score", "Reason"], widths))
    lines.append("-" * 72)
    for item in queue:
        lines.append(
            _row(
                [
                    (item.lead.name or item.lead.id)[:20],
                    item.lead.phone[:16],
                    item.urgency.value,
                    str(item.lead.lead_score),
                    item.reason,
                ],
                widths,
            )
        )
    return "\n".join(lines)


def format_stats(stats: DashboardStats) -> str:
    lines = [
        "Dashboard",
        "=" * 40,
        f"Total leads:         {stats.total_leads}",
        f"HOT / WARM / COLD:   {stats.hot_leads} / {stats.warm_leads} / {stats.cold_leads}",
        f"Follow-ups today:    {stats.followups_due_today}",
        f"Conversion rate:     {stats.conversion_rate:.2f}%",
    ]
    if stats.leads_by_status:
        lines.append("")
        lines.append("By status")
        for status, count in sorted(stats.leads_by_status.items()):
            lines.append(f"  {status:<16}{count}")
    if stats.leads_by_source:
        lines.append("")
        lines.append("By source")
        for source, count in sorted(stats.leads_by_source.items()):
            lines.append(f"  {source:<16}{count}")
    return "\n".join(lines)
