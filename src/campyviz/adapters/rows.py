"""Adapter over rows that were already parsed into a 2-D array."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from campyviz.adapters.base import DataAdapter
from campyviz.adapters.common import TabularAdapterMixin
from campyviz.errors import EmptyInputError
from campyviz.models import GeneRecord


class RowsAdapter(TabularAdapterMixin, DataAdapter):
    """Read gene records from an in-memory header-plus-rows table."""

    name = "rows"

    def __init__(self, rows: Sequence[Sequence[Any]]) -> None:
        self.rows = [list(row) if row is not None else [] for row in rows]

    def read(self) -> Iterable[GeneRecord]:
        data_rows = self.rows[1:]
        if not data_rows or all(self._is_blank_row(row) for row in data_rows):
            raise EmptyInputError("Input contains no data rows")
        return list(self.parse_rows(self.rows))
