"""Aggregation engine turning gene records into the chart payload."""

from __future__ import annotations

import logging
from typing import Iterable

from campyviz.aggregation.accumulate import accumulate
from campyviz.aggregation.derivations import (
    derive_cooccurrence,
    derive_host_stats,
    derive_sankey,
    derive_sunburst,
)
from campyviz.config import AggregationConfig
from campyviz.models import AggregationResult, GeneRecord

logger = logging.getLogger(__name__)


class AggregationEngine:
    """Stateless transform: records in, one ``AggregationResult`` out.

    Every call allocates its own tallies, so one engine can be shared across
    concurrent requests and repeated calls on the same input are identical.
    """

    def __init__(self, config: AggregationConfig | None = None) -> None:
        self.config = config or AggregationConfig()

    def aggregate(self, records: Iterable[GeneRecord]) -> AggregationResult:
        accumulation = accumulate(records)
        logger.debug(
            "Accumulated %d records over %d hosts and %d isolates",
            len(accumulation.genes),
            len(accumulation.host_counts),
            len(accumulation.isolates),
        )

        return AggregationResult(
            genes=tuple(accumulation.genes),
            host_stats=derive_host_stats(
                accumulation,
                precision=self.config.prevalence_precision,
            ),
            species_matrix={
                gene: dict(flags) for gene, flags in accumulation.species_matrix.items()
            },
            processes={name: list(genes) for name, genes in accumulation.processes.items()},
            cooccurrence=derive_cooccurrence(
                accumulation,
                min_occurrence=self.config.min_cooccurrence,
            ),
            sunburst=derive_sunburst(accumulation),
            sankey=derive_sankey(accumulation, top_k=self.config.top_k),
        )
