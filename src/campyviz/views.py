"""Secondary chart views derived from an aggregate payload.

Every function here is pure over the JSON-shaped payload returned by
``AggregationResult.to_payload()``, so they work equally on a freshly computed
result and on a payload loaded back from disk.
"""

from __future__ import annotations

import statistics
from dataclasses import dataclass, field
from typing import Any, Iterable

from campyviz.aggregation.derivations import round_half_up
from campyviz.rules import FUNCTION_CATEGORIES, SPECIES_DISPLAY_LABELS, categorize_function

CANONICAL_HOSTS: tuple[str, ...] = ("Poultry", "Cattle", "Swine", "Human", "Multiple")
SPECIES_KEYS: tuple[str, ...] = ("jejuni", "coli")

VARIABILITY_MODES = ("hosts", "species", "combined")
VARIABILITY_SORTS = ("variability-desc", "variability-asc", "alphabetical")
VARIABILITY_METRICS = ("range", "sd")


def _species_key(token: str) -> str | None:
    lowered = token.lower()
    if "jejuni" in lowered:
        return "jejuni"
    if "coli" in lowered:
        return "coli"
    return None


def top_genes(payload: dict[str, Any], k: int) -> list[str]:
    """Genes ranked by their summed prevalence across hosts, highest first."""

    totals: dict[str, float] = {}
    for stats in payload.get("hostStats", {}).values():
        for gene, value in stats.get("genes", {}).items():
            totals[gene] = totals.get(gene, 0) + value

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [gene for gene, _ in ranked[: max(k, 0)]]


def find_gene(payload: dict[str, Any], gene_name: str) -> dict[str, Any] | None:
    return next(
        (record for record in payload.get("genes", []) if record.get("geneName") == gene_name),
        None,
    )


def _first_functions(payload: dict[str, Any]) -> dict[str, str]:
    """Map each gene to the function text of the first record that names it."""

    functions: dict[str, str] = {}
    for record in payload.get("genes", []):
        functions.setdefault(record["geneName"], record.get("function") or "Unknown")
    return functions


def _first_nonempty_functions(payload: dict[str, Any]) -> dict[str, str]:
    """Like ``_first_functions`` but a later record fills in an empty function."""

    functions: dict[str, str] = {}
    for record in payload.get("genes", []):
        if not functions.get(record["geneName"]):
            functions[record["geneName"]] = record.get("function") or ""
    return {gene: function_text or "Unknown" for gene, function_text in functions.items()}


def function_distribution(payload: dict[str, Any]) -> dict[str, int]:
    """Count distinct genes per display category, omitting empty categories."""

    counts = {category: 0 for category in FUNCTION_CATEGORIES}
    for function_text in _first_functions(payload).values():
        counts[categorize_function(function_text)] += 1
    return {category: count for category, count in counts.items() if count > 0}


def species_counts(
    payload: dict[str, Any],
    genes: Iterable[str],
    *,
    percent: bool = False,
) -> dict[str, dict[str, float]]:
    """Number of records listing each species, for each requested gene.

    With ``percent`` each count becomes its share of that species' total over
    the requested genes; a species with no records keeps its zero counts.
    """

    wanted = list(genes)
    counts: dict[str, dict[str, float]] = {
        gene: {key: 0 for key in SPECIES_KEYS} for gene in wanted
    }
    for record in payload.get("genes", []):
        tally = counts.get(record["geneName"])
        if tally is None:
            continue
        for key in SPECIES_KEYS:
            if key in record.get("species", []):
                tally[key] += 1

    if percent:
        for key in SPECIES_KEYS:
            total = sum(tally[key] for tally in counts.values())
            if total:
                for tally in counts.values():
                    tally[key] = round_half_up(tally[key] / total * 100)
    return counts


def species_prevalence(payload: dict[str, Any]) -> dict[str, dict[str, float]]:
    """Share of each species' token occurrences contributed by each gene, in percent."""

    gene_counts: dict[str, dict[str, int]] = {key: {} for key in SPECIES_KEYS}
    totals = {key: 0 for key in SPECIES_KEYS}
    for record in payload.get("genes", []):
        for token in record.get("species", []):
            key = _species_key(token)
            if key is None:
                continue
            bucket = gene_counts[key]
            bucket[record["geneName"]] = bucket.get(record["geneName"], 0) + 1
            totals[key] += 1

    return {
        SPECIES_DISPLAY_LABELS[key]: {
            gene: round_half_up(count / totals[key] * 100) if totals[key] else 0
            for gene, count in gene_counts[key].items()
        }
        for key in SPECIES_KEYS
    }


@dataclass(frozen=True)
class GeneVariability:
    """Spread of one gene's prevalence across hosts and/or species."""

    gene_name: str
    category: str
    mean_prevalence: float
    std_dev: float
    min_prevalence: float
    max_prevalence: float
    range: float
    min_source: str
    max_source: str
    values: tuple[float, ...] = field(default=())

    def to_payload(self) -> dict[str, Any]:
        return {
            "geneName": self.gene_name,
            "category": self.category,
            "meanPrevalence": self.mean_prevalence,
            "stdDev": self.std_dev,
            "minPrevalence": self.min_prevalence,
            "maxPrevalence": self.max_prevalence,
            "range": self.range,
            "values": list(self.values),
            "minSource": self.min_source,
            "maxSource": self.max_source,
        }


def gene_variability(
    payload: dict[str, Any],
    *,
    mode: str = "hosts",
    sort: str = "variability-desc",
    metric: str = "range",
) -> list[GeneVariability]:
    """Per-gene prevalence spread, zeros included for hosts/species lacking the gene."""

    if mode not in VARIABILITY_MODES:
        raise ValueError(f"Unknown variability mode: {mode}")
    if sort not in VARIABILITY_SORTS:
        raise ValueError(f"Unknown variability sort: {sort}")
    if metric not in VARIABILITY_METRICS:
        raise ValueError(f"Unknown variability metric: {metric}")

    host_prevalence: dict[str, dict[str, float]] = payload.get("hostPrevalence", {})
    genes: dict[str, None] = {}
    for prevalence_map in host_prevalence.values():
        genes.update(dict.fromkeys(prevalence_map))

    hosts = [host for host in CANONICAL_HOSTS if host in host_prevalence]
    by_species = species_prevalence(payload) if mode != "hosts" else {}
    functions = _first_nonempty_functions(payload)

    results: list[GeneVariability] = []
    for gene in genes:
        labeled: list[tuple[str, float]] = []
        if mode in ("hosts", "combined"):
            labeled.extend((host, host_prevalence[host].get(gene, 0)) for host in hosts)
        if mode in ("species", "combined"):
            labeled.extend((label, table.get(gene, 0)) for label, table in by_species.items())
        if not labeled:
            continue

        values = [value for _, value in labeled]
        low, high = min(values), max(values)
        results.append(
            GeneVariability(
                gene_name=gene,
                category=categorize_function(functions.get(gene, "Unknown")),
                mean_prevalence=round_half_up(statistics.fmean(values)),
                std_dev=round_half_up(statistics.pstdev(values)),
                min_prevalence=round_half_up(low),
                max_prevalence=round_half_up(high),
                range=round_half_up(high - low),
                min_source=next(label for label, value in labeled if value == low),
                max_source=next(label for label, value in labeled if value == high),
                values=tuple(values),
            )
        )

    if sort == "alphabetical":
        results.sort(key=lambda item: item.gene_name.lower())
    else:
        spread = (lambda item: item.range) if metric == "range" else (lambda item: item.std_dev)
        results.sort(key=spread, reverse=sort == "variability-desc")
    return results
