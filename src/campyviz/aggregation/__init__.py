"""Aggregation passes producing chart inputs from gene records."""

from .accumulate import RowAccumulation, accumulate
from .derivations import (
    derive_cooccurrence,
    derive_host_stats,
    derive_sankey,
    derive_sunburst,
    prevalence,
    round_half_up,
)
from .engine import AggregationEngine

__all__ = [
    "AggregationEngine",
    "RowAccumulation",
    "accumulate",
    "derive_cooccurrence",
    "derive_host_stats",
    "derive_sankey",
    "derive_sunburst",
    "prevalence",
    "round_half_up",
]
