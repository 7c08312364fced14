"""Canonical in-memory data models used by campyviz."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class GeneRecord:
    """Single virulence-gene annotation parsed from one spreadsheet row.

    ``cluster`` and ``notes`` are ``None`` when the sheet has no such column,
    which keeps them out of the serialized payload entirely.
    """

    gene_name: str
    function: str
    species: tuple[str, ...] = ()
    hosts: tuple[str, ...] = ()
    cluster: str | None = None
    notes: str | None = None

    def to_row(self) -> dict[str, Any]:
        """Serialize into the camel-cased JSON shape consumed by charts."""

        row: dict[str, Any] = {"geneName": self.gene_name}
        if self.cluster is not None:
            row["cluster"] = self.cluster
        row["function"] = self.function
        row["species"] = list(self.species)
        row["hosts"] = list(self.hosts)
        if self.notes is not None:
            row["notes"] = self.notes
        return row


@dataclass(frozen=True)
class HostStats:
    """Prevalence table for one host."""

    total_isolates: int
    genes: dict[str, float] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return {"totalIsolates": self.total_isolates, "genes": dict(self.genes)}


@dataclass(frozen=True)
class CooccurrenceNode:
    id: str
    count: int

    def to_payload(self) -> dict[str, Any]:
        return {"id": self.id, "count": self.count}


@dataclass(frozen=True)
class CooccurrenceLink:
    source: str
    target: str
    count: int

    def to_payload(self) -> dict[str, Any]:
        return {"source": self.source, "target": self.target, "count": self.count}


@dataclass(frozen=True)
class CooccurrenceGraph:
    nodes: tuple[CooccurrenceNode, ...] = ()
    links: tuple[CooccurrenceLink, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_payload() for node in self.nodes],
            "links": [link.to_payload() for link in self.links],
        }


@dataclass(frozen=True)
class SunburstNode:
    """Tree node; inner nodes carry ``children``, leaves carry ``value``."""

    name: str
    children: tuple["SunburstNode", ...] | None = None
    value: int | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name}
        if self.children is not None:
            payload["children"] = [child.to_payload() for child in self.children]
        if self.value is not None:
            payload["value"] = self.value
        return payload


@dataclass(frozen=True)
class SankeyLink:
    source: int
    target: int
    value: int

    def to_payload(self) -> dict[str, Any]:
        return {"source": self.source, "target": self.target, "value": self.value}


@dataclass(frozen=True)
class SankeyGraph:
    labels: tuple[str, ...] = ()
    links: tuple[SankeyLink, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        return {
            "nodes": [{"label": label} for label in self.labels],
            "links": [link.to_payload() for link in self.links],
        }


@dataclass(frozen=True)
class AggregationResult:
    """Every derived chart input computed from one spreadsheet."""

    genes: tuple[GeneRecord, ...]
    host_stats: dict[str, HostStats]
    species_matrix: dict[str, dict[str, bool]]
    processes: dict[str, list[str]]
    cooccurrence: CooccurrenceGraph
    sunburst: SunburstNode
    sankey: SankeyGraph

    @property
    def host_totals(self) -> dict[str, int]:
        return {host: stats.total_isolates for host, stats in self.host_stats.items()}

    @property
    def host_prevalence(self) -> dict[str, dict[str, float]]:
        return {host: dict(stats.genes) for host, stats in self.host_stats.items()}

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON contract shared with every chart component."""

        return {
            "genes": [record.to_row() for record in self.genes],
            "hostStats": {host: stats.to_payload() for host, stats in self.host_stats.items()},
            "hostTotals": self.host_totals,
            "hostPrevalence": self.host_prevalence,
            "speciesMatrix": {gene: dict(flags) for gene, flags in self.species_matrix.items()},
            "processes": {name: list(genes) for name, genes in self.processes.items()},
            "cooccurrence": self.cooccurrence.to_payload(),
            "sunburstHierarchy": self.sunburst.to_payload(),
            "sankeyData": self.sankey.to_payload(),
        }
