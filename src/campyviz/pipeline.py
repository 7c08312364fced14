"""Composable campyviz pipeline orchestrator."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from campyviz.adapters.base import DataAdapter
from campyviz.aggregation import AggregationEngine
from campyviz.errors import AggregationFailure, EmptyInputError, MissingInputError
from campyviz.publishers.base import Publisher
from campyviz.quality import PayloadValidator

logger = logging.getLogger(__name__)


@dataclass
class VisualizationRunReport:
    """Execution summary for a pipeline run."""

    gene_records: int
    distinct_genes: int
    hosts: int
    cooccurrence_links: int
    payload: dict[str, Any] = field(repr=False, default_factory=dict)


class VisualizationPipeline:
    """Read, aggregate, validate and publish in order.

    Missing and empty inputs propagate unchanged; any other exception is
    reported as ``AggregationFailure`` and nothing is published.
    """

    def __init__(
        self,
        *,
        adapter: DataAdapter,
        engine: AggregationEngine | None = None,
        validator: PayloadValidator | None = None,
        publishers: list[Publisher] | None = None,
    ) -> None:
        self.adapter = adapter
        self.engine = engine or AggregationEngine()
        self.validator = validator
        self.publishers = publishers or []

    def run(self) -> VisualizationRunReport:
        try:
            report = self._build_report()
        except (MissingInputError, EmptyInputError):
            raise
        except AggregationFailure:
            logger.error("Aggregation payload failed validation")
            raise
        except Exception as exc:
            logger.exception("Failed to aggregate source via %s", self.adapter.name)
            raise AggregationFailure(f"{type(exc).__name__}: {exc}") from exc

        for publisher in self.publishers:
            publisher.publish(report.payload)

        return report

    def _build_report(self) -> VisualizationRunReport:
        records = list(self.adapter.read())
        result = self.engine.aggregate(records)
        payload = result.to_payload()

        if self.validator is not None:
            issues = self.validator.validate(payload).issues
            if issues:
                first = issues[0]
                raise AggregationFailure(
                    f"Payload violates schema at {first.path}: {first.message}"
                    f" ({len(issues)} issue(s))"
                )

        return VisualizationRunReport(
            gene_records=len(result.genes),
            distinct_genes=len(result.species_matrix),
            hosts=len(result.host_stats),
            cooccurrence_links=len(result.cooccurrence.links),
            payload=payload,
        )
