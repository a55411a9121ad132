"""Best-effort parsing for raw lead-record values.

Records arrive from the document store, web forms, and hand-written
fixtures, so numbers may be strings with currency symbols and Indian digit
grouping, and timestamps may be ISO strings, epoch seconds, or serialized
store timestamps.  Every parser returns ``None`` for unparseable input.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any

# Indian-market shorthand used on lead forms: "75L", "1.2 Cr".
_BUDGET_SUFFIXES = {
    "cr": 10_000_000,
    "crore": 10_000_000,
    "l": 100_000,
    "lac": 100_000,
    "lakh": 100_000,
    "k": 1_000,
}
_NUMBER = re.compile(r"-?\d[\d,]*(?:\.\d+)?|-?\.\d+")


def clean_numeric_string(raw: str) -> str:
    """Keep only digits, ``'.'``, and ``'-'``."""
    return "".join(c for c in raw if c.isdigit() or c in {".", "-"})


def _split_suffix(text: str) -> tuple[str, int]:
    lowered = text.lower().rstrip(". ")
    for suffix in sorted(_BUDGET_SUFFIXES, key=len, reverse=True):
        if lowered.endswith(suffix):
            head = lowered[: -len(suffix)]
            if head and (head[-1].isdigit() or head[-1] == " "):
                return head, _BUDGET_SUFFIXES[suffix]
    return text, 1


def parse_budget(value: Any) -> float | None:
    """Parse a budget like ``5000000``, ``"₹50,00,000"``, or ``"1.2 Cr"``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        number, multiplier = _split_suffix(stripped)
        match = _NUMBER.search(number)
        if match is None:
            return None
        return float(match.group().replace(",", "")) * multiplier
    return None


def parse_int(value: Any) -> int | None:
    """Best-effort integer parsing."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        try:
            return int(value)
        except (OverflowError, ValueError):
            return None
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        cleaned = clean_numeric_string(stripped)
        if not cleaned:
            return None
        try:
            return int(float(cleaned))
        except (OverflowError, ValueError):
            return None
    return None


def parse_float(value: Any) -> float | None:
    """Best-effort float parsing that keeps the sign."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            return float(stripped)
        except ValueError:
            return None
    return None


def _from_epoch(seconds: float) -> datetime | None:
    # Out-of-range values include epoch milliseconds read as seconds.
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a timestamp into an aware UTC-or-offset ``datetime``.

    Accepts ``datetime``/``date`` objects, ISO-8601 strings (a trailing
    ``Z`` included), epoch seconds, and store timestamps serialized as
    ``{"seconds": ..., "nanoseconds": ...}`` (or ``_seconds``).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        return _from_epoch(value)
    if isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds"))
        if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
            return None
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
        if isinstance(nanos, bool) or not isinstance(nanos, (int, float)):
            return None
        return _from_epoch(seconds + nanos / 1e9)
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        if stripped.endswith(("Z", "z")):
            stripped = stripped[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(stripped)
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None
