"""Failure taxonomy surfaced by campyviz runs."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class CampyvizError(Exception):
    """Base class for all campyviz failures."""


class MissingInputError(CampyvizError, FileNotFoundError):
    """No source spreadsheet exists at any of the known locations."""

    def __init__(self, tried_paths: Iterable[str | Path]) -> None:
        self.tried_paths = [Path(path) for path in tried_paths]
        locations = ", ".join(str(path) for path in self.tried_paths) or "<none>"
        super().__init__(f"Source spreadsheet not found. Tried: {locations}")


class EmptyInputError(CampyvizError, ValueError):
    """The source spreadsheet parsed to zero data rows."""


class AggregationFailure(CampyvizError, RuntimeError):
    """Unexpected exception while reading or aggregating the spreadsheet."""
