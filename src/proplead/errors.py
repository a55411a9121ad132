"""Errors raised at the edges of the scoring engine.

The scorers themselves never raise; these cover reading lead data and
rule files.
"""

from __future__ import annotations


class LeadDataError(ValueError):
    """A lead file or record set could not be read or failed validation."""

    def __init__(self, message: str, *, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])
