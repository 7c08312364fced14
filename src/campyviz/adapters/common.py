"""Shared utilities for spreadsheet source adapters."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator, Sequence

import pandas as pd

from campyviz.config import COLUMN_RULES, UNKNOWN_FUNCTION, UNKNOWN_HOST, ColumnRule
from campyviz.errors import MissingInputError
from campyviz.models import GeneRecord
from campyviz.rules import normalize_host, normalize_species

logger = logging.getLogger(__name__)

_MULTI_VALUE_SPLIT = re.compile(r"[,;]")


def expand_path(path: str | Path, base_dir: str | Path | None = None) -> Path:
    """Expand ``~``/environment variables and anchor relative paths at ``base_dir``."""

    expanded = Path(os.path.expandvars(os.path.expanduser(str(path))))
    if base_dir is not None and not expanded.is_absolute():
        expanded = Path(base_dir) / expanded
    return expanded


def resolve_source_path(
    candidates: Iterable[str | Path],
    base_dir: str | Path | None = None,
) -> Path:
    """Return the first existing candidate, raising ``MissingInputError`` otherwise."""

    tried: list[Path] = []
    for candidate in candidates:
        path = expand_path(candidate, base_dir)
        if path.is_file():
            return path
        tried.append(path)

    raise MissingInputError(tried)


@dataclass(frozen=True)
class ColumnLayout:
    """Column positions located from the header row; ``None`` means absent."""

    gene_name: int | None = None
    cluster: int | None = None
    function: int | None = None
    species: int | None = None
    host: int | None = None
    notes: int | None = None

    @classmethod
    def from_header(
        cls,
        header: Sequence[Any],
        rules: Sequence[ColumnRule] = COLUMN_RULES,
    ) -> "ColumnLayout":
        labels = [TabularAdapterMixin._to_string(cell) for cell in header]
        positions: dict[str, int | None] = {}
        for rule in rules:
            positions[rule.field_name] = next(
                (index for index, label in enumerate(labels) if rule.matches(label)),
                None,
            )
        return cls(**positions)


class TabularAdapterMixin:
    """Defensive cell conversions shared by tabular adapters.

    Cells are always stringified and defaulted, so a malformed row degrades to
    empty values instead of raising.
    """

    @staticmethod
    def _to_string(value: Any) -> str:
        if value is None:
            return ""
        try:
            if pd.isna(value):
                return ""
        except (TypeError, ValueError):
            pass
        return str(value).strip()

    @classmethod
    def _cell(cls, row: Sequence[Any], index: int | None) -> str:
        if index is None or index >= len(row):
            return ""
        return cls._to_string(row[index])

    @staticmethod
    def _split_multi_value(text: str) -> list[str]:
        return [part.strip() for part in _MULTI_VALUE_SPLIT.split(text) if part.strip()]

    @classmethod
    def _parse_species(cls, text: str) -> tuple[str, ...]:
        return tuple(normalize_species(token) for token in cls._split_multi_value(text))

    @staticmethod
    def _parse_hosts(text: str) -> tuple[str, ...]:
        hosts = (normalize_host(token) for token in _MULTI_VALUE_SPLIT.split(text))
        return tuple(host for host in hosts if host and host != UNKNOWN_HOST)

    @staticmethod
    def _is_blank_row(row: Sequence[Any] | None) -> bool:
        return not row or all(TabularAdapterMixin._to_string(cell) == "" for cell in row)

    def parse_rows(self, rows: Sequence[Sequence[Any]]) -> Iterator[GeneRecord]:
        """Yield one ``GeneRecord`` per data row that has a gene name.

        The first row is the header and is only used to locate columns.
        """

        if not rows:
            return

        layout = ColumnLayout.from_header(rows[0])
        if layout.gene_name is None:
            logger.warning("No gene/name column found in header: %s", list(rows[0]))

        skipped = 0
        for row in rows[1:]:
            if self._is_blank_row(row):
                skipped += 1
                continue

            gene_name = self._cell(row, layout.gene_name)
            if not gene_name:
                skipped += 1
                continue

            yield GeneRecord(
                gene_name=gene_name,
                cluster=self._cell(row, layout.cluster) if layout.cluster is not None else None,
                function=(
                    self._cell(row, layout.function)
                    if layout.function is not None
                    else UNKNOWN_FUNCTION
                ),
                species=self._parse_species(self._cell(row, layout.species)),
                hosts=self._parse_hosts(self._cell(row, layout.host)),
                notes=self._cell(row, layout.notes) if layout.notes is not None else None,
            )

        if skipped:
            logger.debug("Skipped %d rows without a gene name", skipped)
