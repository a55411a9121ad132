"""Boundary validation for raw lead and task records.

The scoring engine trusts its input.  Callers that read records from the
store, a form, or a file run them through here first and refuse to score
what fails.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from proplead.models import LeadSource, LeadStatus, TaskStatus, TaskType
from proplead.parsing import parse_budget, parse_float, parse_int, parse_timestamp

_LEAD_TIMESTAMPS = ("visit_scheduled_at", "last_interaction_at", "updated_at", "created_at")
_ACTIVITY_TIMESTAMPS = ("last_interaction_at", "updated_at", "created_at")
_SOURCES = frozenset(s.value for s in LeadSource)
_STATUSES = frozenset(s.value for s in LeadStatus)
_TASK_TYPES = frozenset(t.value for t in TaskType)
_TASK_STATUSES = frozenset(s.value for s in TaskStatus)


class ValidationResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


def _check_enum(
    label: str, key: str, value: Any, allowed: frozenset[str], errors: list[str],
) -> None:
    if value is None:
        return
    if not isinstance(value, str) or value not in allowed:
        errors.append(
            f"{label}: field '{key}' must be one of {', '.join(sorted(allowed))}, got {value!r}"
        )


def _check_non_negative(
    label: str, key: str, value: Any, parser: Callable[[Any], float | int | None], errors: list[str],
) -> None:
    if value is None:
        return
    parsed = parser(value)
    if parsed is None:
        errors.append(f"{label}: field '{key}' is not a number: {value!r}")
    elif parsed < 0:
        errors.append(f"{label}: field '{key}' must not be negative, got {parsed}")


def _validate_lead(index: int, record: Mapping[str, Any]) -> tuple[list[str], list[str]]:
    label = f"Lead {record.get('id') or index}"
    errors: list[str] = []
    warnings: list[str] = []

    _check_enum(label, "source", record.get("source"), _SOURCES, errors)
    _check_enum(label, "status", record.get("status"), _STATUSES, errors)
    _check_non_negative(label, "budget", record.get("budget"), parse_budget, errors)
    _check_non_negative(label, "message_count", record.get("message_count"), parse_int, errors)
    _check_non_negative(
        label, "first_response_time", record.get("first_response_time"), parse_float, errors,
    )

    target = record.get("target_property_price")
    if target is not None:
        parsed_target = parse_budget(target)
        if parsed_target is None or parsed_target <= 0:
            errors.append(
                f"{label}: field 'target_property_price' must be a positive number, got {target!r}"
            )

    score = record.get("lead_score")
    if score is not None:
        parsed_score = parse_int(score)
        if parsed_score is None or not 0 <= parsed_score <= 100:
            errors.append(f"{label}: field 'lead_score' must be within 0-100, got {score!r}")

    for key in _LEAD_TIMESTAMPS:
        value = record.get(key)
        if value is not None and parse_timestamp(value) is None:
            errors.append(f"{label}: field '{key}' is not a timestamp: {value!r}")

    if not record.get("id"):
        warnings.append(f"{label}: record has no id")
    if all(record.get(key) is None for key in _ACTIVITY_TIMESTAMPS):
        warnings.append(f"{label}: no activity timestamp, recency will score 0")
    if "lead_priority" in record:
        warnings.append(f"{label}: stored lead_priority is ignored and derived from lead_score")

    return errors, warnings


def validate_lead_records(records: list[Any]) -> ValidationResult:
    """Check raw lead documents before they are turned into snapshots."""
    errors: list[str] = []
    warnings: list[str] = []
    for i, record in enumerate(records):
        if not isinstance(record, Mapping):
            errors.append(f"Lead {i}: record must be a mapping, got {type(record).__name__}")
            continue
        rec_errors, rec_warnings = _validate_lead(i, record)
        errors.extend(rec_errors)
        warnings.extend(rec_warnings)
    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def validate_task_records(records: list[Any]) -> ValidationResult:
    """Check raw task documents used by the call queue and dashboard."""
    errors: list[str] = []
    for i, record in enumerate(records):
        if not isinstance(record, Mapping):
            errors.append(f"Task {i}: record must be a mapping, got {type(record).__name__}")
            continue
        label = f"Task {record.get('id') or i}"
        if not record.get("lead_id"):
            errors.append(f"{label}: missing required field 'lead_id'")
        if record.get("due_date") is None:
            errors.append(f"{label}: missing required field 'due_date'")
        elif parse_timestamp(record["due_date"]) is None:
            errors.append(f"{label}: field 'due_date' is not a timestamp: {record['due_date']!r}")
        _check_enum(label, "type", record.get("type"), _TASK_TYPES, errors)
        _check_enum(label, "status", record.get("status"), _TASK_STATUSES, errors)
    return ValidationResult(valid=not errors, errors=errors)
