"""Configuration contracts for campyviz aggregation runs."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ColumnRule:
    """Locate a sheet column by case-insensitive substring match on its header."""

    field_name: str
    keywords: tuple[str, ...]

    def matches(self, header: str) -> bool:
        """Return True when any keyword occurs in the lower-cased header."""

        lowered = header.lower().strip()
        return any(keyword in lowered for keyword in self.keywords)


# Evaluated independently per field; the first matching header wins.
COLUMN_RULES: tuple[ColumnRule, ...] = (
    ColumnRule("gene_name", ("gene", "name")),
    ColumnRule("cluster", ("cluster",)),
    ColumnRule("function", ("function", "role")),
    ColumnRule("species", ("species",)),
    ColumnRule("host", ("host",)),
    ColumnRule("notes", ("note", "comment")),
)

DEFAULT_DATA_FILES: tuple[str, ...] = (
    "public/data/campylobacter.xlsx",
    "public/data/campylobacter (1).xlsx",
)

UNKNOWN_FUNCTION = "Unknown"
UNKNOWN_HOST = "Unknown"


@dataclass(frozen=True)
class AggregationConfig:
    """Tunable parameters of the aggregation engine.

    ``min_cooccurrence`` is the noise floor for the co-occurrence graph: genes
    recorded in fewer rows are left out of both nodes and links. ``top_k``
    bounds the gene side of the host-to-gene flow diagram.
    """

    top_k: int = 20
    min_cooccurrence: int = 3
    prevalence_precision: int = 2

    def __post_init__(self) -> None:
        if self.top_k < 0:
            raise ValueError(f"top_k must be >= 0, got {self.top_k}")
        if self.min_cooccurrence < 1:
            raise ValueError(f"min_cooccurrence must be >= 1, got {self.min_cooccurrence}")
        if self.prevalence_precision < 0:
            raise ValueError(
                f"prevalence_precision must be >= 0, got {self.prevalence_precision}"
            )
