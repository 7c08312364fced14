"""Input adapters for campyviz."""

from .base import DataAdapter
from .common import ColumnLayout, TabularAdapterMixin, resolve_source_path
from .rows import RowsAdapter
from .spreadsheet import SpreadsheetAdapter

__all__ = [
    "DataAdapter",
    "ColumnLayout",
    "TabularAdapterMixin",
    "RowsAdapter",
    "SpreadsheetAdapter",
    "resolve_source_path",
]
