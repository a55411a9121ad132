"""Reading lead/task records and scoring rules from YAML or JSON files.

A lead file is either a list of lead records or a mapping with ``leads``
and (optionally) ``tasks`` lists.  Records use the store's field names;
``target_property_price`` may be set per lead for budget matching.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from proplead.errors import LeadDataError
from proplead.models import LeadSnapshot, ScoringInput, Task
from proplead.parsing import parse_budget, parse_float, parse_int, parse_timestamp
from proplead.scoring.quick import create_scoring_input
from proplead.scoring.rules import DEFAULT_RULES, ScoringRules, rules_from_mapping
from proplead.validator import validate_lead_records, validate_task_records

logger = logging.getLogger(__name__)

_TIMESTAMP_FIELDS = ("visit_scheduled_at", "last_interaction_at", "updated_at", "created_at")


@dataclass
class LeadFile:
    """Leads and tasks read from one file."""

    leads: list[LeadSnapshot] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)
    # Parallel to ``leads``: ids may be missing, so prices go by position.
    target_prices: list[float | None] = field(default_factory=list)

    def scoring_inputs(self) -> list[ScoringInput]:
        """One scoring input per lead, using the counters cached on each record."""
        return [
            create_scoring_input(lead, target_property_price=target)
            for lead, target in zip(self.leads, self.target_prices)
        ]


def _read_document(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except FileNotFoundError as exc:
        raise LeadDataError(f"Lead file does not exist: {path}") from exc
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise LeadDataError(f"Could not parse {path}: {exc}") from exc


def normalize_lead_record(raw: dict[str, Any]) -> dict[str, Any]:
    """Coerce loosely typed store values into what :class:`LeadSnapshot` expects."""
    record = dict(raw)
    if "id" in record and record["id"] is not None:
        record["id"] = str(record["id"])
    if record.get("budget") is not None:
        record["budget"] = parse_budget(record["budget"])
    if record.get("message_count") is not None:
        record["message_count"] = parse_int(record["message_count"])
    if record.get("first_response_time") is not None:
        record["first_response_time"] = parse_float(record["first_response_time"])
    if record.get("lead_score") is not None:
        record["lead_score"] = parse_int(record["lead_score"])
    for key in _TIMESTAMP_FIELDS:
        if record.get(key) is not None:
            record[key] = parse_timestamp(record[key])
    record.pop("target_property_price", None)
    return record


def normalize_task_record(raw: dict[str, Any]) -> dict[str, Any]:
    record = dict(raw)
    for key in ("id", "lead_id"):
        if record.get(key) is not None:
            record[key] = str(record[key])
    record["due_date"] = parse_timestamp(record.get("due_date"))
    return record


def parse_lead_document(data: Any, *, origin: str = "<records>") -> LeadFile:
    """Validate and convert an already-decoded lead document."""
    if data is None:
        raise LeadDataError(f"Empty lead file: {origin}")
    if isinstance(data, list):
        lead_records, task_records = data, []
    elif isinstance(data, dict):
        lead_records = data.get("leads") or []
        task_records = data.get("tasks") or []
        if not isinstance(lead_records, list) or not isinstance(task_records, list):
            raise LeadDataError(f"'leads' and 'tasks' must be lists: {origin}")
    else:
        raise LeadDataError(f"Lead file root must be a list or mapping: {origin}")

    lead_check = validate_lead_records(lead_records)
    task_check = validate_task_records(task_records)
    for warning in lead_check.warnings:
        logger.warning("%s: %s", origin, warning)
    errors = [*lead_check.errors, *task_check.errors]
    if errors:
        raise LeadDataError(
            f"{len(errors)} invalid record field(s) in {origin}: {errors[0]}",
            errors=errors,
        )

    result = LeadFile()
    try:
        for raw in lead_records:
            lead = LeadSnapshot.model_validate(normalize_lead_record(raw))
            result.leads.append(lead)
            result.target_prices.append(parse_budget(raw.get("target_property_price")))
        result.tasks = [
            Task.model_validate(normalize_task_record(raw)) for raw in task_records
        ]
    except ValidationError as exc:
        raise LeadDataError(f"Invalid record in {origin}: {exc}") from exc

    logger.debug("Loaded %d leads and %d tasks from %s", len(result.leads), len(result.tasks), origin)
    return result


def load_lead_file(path: str | Path) -> LeadFile:
    """Load leads and tasks from a ``.yaml``/``.yml`` or ``.json`` file."""
    path = Path(path)
    return parse_lead_document(_read_document(path), origin=str(path))


def load_scoring_rules(path: str | Path) -> ScoringRules:
    """Load rule overrides from a YAML mapping.  An empty file means defaults."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ValueError(f"Could not parse scoring rules {path}: {exc}") from exc
    if raw is None:
        logger.info("Scoring rules file %s is empty; using defaults", path)
        return DEFAULT_RULES
    if not isinstance(raw, dict):
        raise ValueError(f"Scoring rules YAML root must be a mapping: {path}")
    return rules_from_mapping(raw)
