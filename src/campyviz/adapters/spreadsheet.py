"""Adapter that ingests the first sheet of an Excel or CSV workbook."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Sequence

import pandas as pd

from campyviz.adapters.base import DataAdapter
from campyviz.adapters.common import TabularAdapterMixin, resolve_source_path
from campyviz.config import DEFAULT_DATA_FILES
from campyviz.errors import EmptyInputError
from campyviz.models import GeneRecord

logger = logging.getLogger(__name__)

_CSV_SUFFIXES = (".csv", ".csv.gz", ".tsv")


class SpreadsheetAdapter(TabularAdapterMixin, DataAdapter):
    """Read gene annotations from the first existing candidate workbook.

    ``data_files`` is an ordered list of fallbacks; relative entries are
    resolved against ``base_dir`` (the working directory when omitted).
    """

    name = "spreadsheet"

    def __init__(
        self,
        *,
        data_files: str | Path | Sequence[str | Path] = DEFAULT_DATA_FILES,
        base_dir: str | Path | None = None,
        sheet_name: int | str = 0,
    ) -> None:
        if isinstance(data_files, (str, Path)):
            data_files = [data_files]
        self.data_files = list(data_files)
        self.base_dir = base_dir
        self.sheet_name = sheet_name

    def read(self) -> Iterable[GeneRecord]:
        path = resolve_source_path(self.data_files, self.base_dir)
        logger.info("Reading gene annotations from %s", path)

        rows = self.load_rows(path)
        if len(rows) <= 1:
            raise EmptyInputError(f"Spreadsheet is empty: {path}")

        records = list(self.parse_rows(rows))
        logger.info("Parsed %d gene records from %d data rows", len(records), len(rows) - 1)
        return records

    def load_rows(self, path: Path) -> list[list[Any]]:
        """Return the sheet as a list of rows, header first, blank rows removed."""

        frame = self._read_frame(path)
        rows = frame.astype(object).where(frame.notna(), None).values.tolist()
        return [row for row in rows if not self._is_blank_row(row)]

    def _read_frame(self, path: Path) -> pd.DataFrame:
        name = path.name.lower()
        if name.endswith(_CSV_SUFFIXES):
            separator = "\t" if name.endswith(".tsv") else ","
            try:
                return pd.read_csv(
                    path,
                    header=None,
                    sep=separator,
                    dtype=str,
                    keep_default_na=False,
                )
            except pd.errors.EmptyDataError:
                return pd.DataFrame()

        return pd.read_excel(path, sheet_name=self.sheet_name, header=None, dtype=object)
