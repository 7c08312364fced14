"""Single-pass fold of gene records into per-host, per-isolate and per-gene tallies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from campyviz.models import GeneRecord
from campyviz.rules import categorize_process, primary_species

IsolateKey = tuple[str, str]


@dataclass
class RowAccumulation:
    """Raw tallies gathered from one pass over the records.

    Dict insertion order is first-encounter order everywhere; derivation passes
    rely on it for stable output. ``isolates`` maps ``(host, primary species)``
    to an insertion-ordered set of gene names.
    """

    genes: list[GeneRecord] = field(default_factory=list)
    gene_counts: dict[str, int] = field(default_factory=dict)
    host_counts: dict[str, dict[str, int]] = field(default_factory=dict)
    host_totals: dict[str, int] = field(default_factory=dict)
    isolates: dict[IsolateKey, dict[str, None]] = field(default_factory=dict)
    species_matrix: dict[str, dict[str, bool]] = field(default_factory=dict)
    processes: dict[str, list[str]] = field(default_factory=dict)

    def add(self, record: GeneRecord) -> None:
        gene = record.gene_name
        self.genes.append(record)
        self.gene_counts[gene] = self.gene_counts.get(gene, 0) + 1

        species = primary_species(record.species)
        for host in record.hosts:
            self.isolates.setdefault((host, species), {})[gene] = None

            counts = self.host_counts.setdefault(host, {})
            counts[gene] = counts.get(gene, 0) + 1
            self.host_totals[host] = self.host_totals.get(host, 0) + 1

        # Flags only ever flip from False to True.
        flags = self.species_matrix.setdefault(gene, {"jejuni": False, "coli": False})
        if "jejuni" in record.species:
            flags["jejuni"] = True
        if "coli" in record.species:
            flags["coli"] = True

        bucket = self.processes.setdefault(categorize_process(record.function), [])
        if gene not in bucket:
            bucket.append(gene)

    def host_gene_totals(self) -> dict[str, int]:
        """Sum each gene's occurrence count across every host, in gene encounter order."""

        return {
            gene: sum(counts.get(gene, 0) for counts in self.host_counts.values())
            for gene in self.gene_counts
        }


def accumulate(records: Iterable[GeneRecord]) -> RowAccumulation:
    accumulation = RowAccumulation()
    for record in records:
        accumulation.add(record)
    return accumulation
