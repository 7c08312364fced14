"""Derivation passes that turn raw tallies into chart-ready structures.

Each pass reads a finished ``RowAccumulation`` and allocates fresh output; none
of them mutate the accumulation, so they can run in any order.
"""

from __future__ import annotations

import logging
import math
from itertools import combinations

from campyviz.aggregation.accumulate import RowAccumulation
from campyviz.models import (
    CooccurrenceGraph,
    CooccurrenceLink,
    CooccurrenceNode,
    HostStats,
    SankeyGraph,
    SankeyLink,
    SunburstNode,
)
from campyviz.rules import SPECIES_DISPLAY_LABELS

logger = logging.getLogger(__name__)

SUNBURST_ROOT = "All isolates"


def round_half_up(value: float, precision: int = 2) -> float:
    """Round to ``precision`` decimals with ties going up, as the charts display them."""

    factor = 10**precision
    return math.floor(value * factor + 0.5) / factor


def prevalence(count: int, total: int, precision: int = 2) -> float:
    """Percentage of ``total`` represented by ``count``; 0 when ``total`` is 0."""

    if total <= 0:
        return 0
    return round_half_up(count / total * 100, precision)


def derive_host_stats(
    accumulation: RowAccumulation,
    *,
    precision: int = 2,
) -> dict[str, HostStats]:
    stats: dict[str, HostStats] = {}
    for host, counts in accumulation.host_counts.items():
        total = accumulation.host_totals.get(host, 0)
        stats[host] = HostStats(
            total_isolates=total,
            genes={gene: prevalence(count, total, precision) for gene, count in counts.items()},
        )
    return stats


def derive_cooccurrence(
    accumulation: RowAccumulation,
    *,
    min_occurrence: int = 3,
) -> CooccurrenceGraph:
    """Build the gene co-occurrence graph over isolate gene sets.

    Only genes recorded in at least ``min_occurrence`` rows take part. Pairs
    are counted once per isolate and emitted once, with ``source < target``.
    """

    kept = [gene for gene, count in accumulation.gene_counts.items() if count >= min_occurrence]
    kept_set = set(kept)

    pair_counts: dict[str, dict[str, int]] = {gene: {} for gene in kept}
    for gene_set in accumulation.isolates.values():
        members = [gene for gene in gene_set if gene in kept_set]
        for first, second in combinations(members, 2):
            pair_counts[first][second] = pair_counts[first].get(second, 0) + 1
            pair_counts[second][first] = pair_counts[second].get(first, 0) + 1

    links: list[CooccurrenceLink] = []
    for source in kept:
        for target, count in pair_counts[source].items():
            if source < target and count > 0:
                links.append(CooccurrenceLink(source=source, target=target, count=count))

    logger.debug("Co-occurrence graph: %d nodes, %d links", len(kept), len(links))
    return CooccurrenceGraph(
        nodes=tuple(CooccurrenceNode(id=gene, count=accumulation.gene_counts[gene]) for gene in kept),
        links=tuple(links),
    )


def derive_sunburst(accumulation: RowAccumulation) -> SunburstNode:
    """Three-level tree: all isolates -> species label -> host, valued by gene-set size."""

    buckets: dict[str, dict[str, int]] = {}
    for (host, species), gene_set in accumulation.isolates.items():
        label = SPECIES_DISPLAY_LABELS.get(species, SPECIES_DISPLAY_LABELS["other"])
        hosts = buckets.setdefault(label, {})
        hosts[host] = hosts.get(host, 0) + len(gene_set)

    return SunburstNode(
        name=SUNBURST_ROOT,
        children=tuple(
            SunburstNode(
                name=label,
                children=tuple(SunburstNode(name=host, value=value) for host, value in hosts.items()),
            )
            for label, hosts in buckets.items()
        ),
    )


def derive_sankey(accumulation: RowAccumulation, *, top_k: int = 20) -> SankeyGraph:
    """Host-to-gene flow limited to the ``top_k`` genes by cross-host occurrence."""

    totals = accumulation.host_gene_totals()
    # sorted() is stable, so ties keep gene encounter order.
    top_genes = [gene for gene, _ in sorted(totals.items(), key=lambda item: item[1], reverse=True)]
    top_genes = top_genes[:top_k]

    hosts = list(accumulation.host_counts)
    host_index = {host: index for index, host in enumerate(hosts)}
    gene_index = {gene: len(hosts) + index for index, gene in enumerate(top_genes)}

    links: list[SankeyLink] = []
    for host in hosts:
        counts = accumulation.host_counts[host]
        for gene in top_genes:
            count = counts.get(gene, 0)
            if count > 0:
                links.append(
                    SankeyLink(source=host_index[host], target=gene_index[gene], value=count)
                )

    return SankeyGraph(labels=tuple(hosts) + tuple(top_genes), links=tuple(links))
