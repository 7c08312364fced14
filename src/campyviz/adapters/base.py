"""Base interface for all campyviz ingestion adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from campyviz.models import GeneRecord


class DataAdapter(ABC):
    """Adapter that converts a source sheet into gene records."""

    name: str

    @abstractmethod
    def read(self) -> Iterable[GeneRecord]:
        """Yield gene records from the adapter source."""
