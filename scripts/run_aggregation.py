#!/usr/bin/env python3
"""Aggregate the virulence-gene spreadsheet into the chart JSON payload."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from campyviz import (  # noqa: E402
    AggregationConfig,
    AggregationEngine,
    AggregationProfileLoader,
    CampyvizError,
    EmptyInputError,
    JsonPayloadPublisher,
    MissingInputError,
    PayloadValidator,
    SpreadsheetAdapter,
    VisualizationPipeline,
)

EXIT_MISSING_INPUT = 2
EXIT_EMPTY_INPUT = 3
EXIT_INTERNAL_FAILURE = 1


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the campyviz aggregate payload")
    parser.add_argument("--profile", default="campylobacter", help="Profile name or JSON path")
    parser.add_argument("--profiles-dir", default=None, help="Directory holding profile JSON files")
    parser.add_argument(
        "--input",
        action="append",
        default=None,
        help="Spreadsheet path; repeat to give fallbacks. Overrides the profile data files.",
    )
    parser.add_argument("--data-root", default=None, help="Base directory for relative inputs")
    parser.add_argument("--output", default=None, help="Write the payload JSON to this path")
    parser.add_argument("--top-k", type=int, default=None, help="Genes kept in the flow diagram")
    parser.add_argument(
        "--min-cooccurrence",
        type=int,
        default=None,
        help="Minimum gene occurrence for the co-occurrence network",
    )
    parser.add_argument(
        "--skip-validation",
        action="store_true",
        help="Do not validate the payload against the JSON schema",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, base: AggregationConfig) -> AggregationConfig:
    return AggregationConfig(
        top_k=base.top_k if args.top_k is None else args.top_k,
        min_cooccurrence=(
            base.min_cooccurrence if args.min_cooccurrence is None else args.min_cooccurrence
        ),
        prevalence_precision=base.prevalence_precision,
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger("campyviz.runner")

    profile = AggregationProfileLoader(profiles_dir=args.profiles_dir).load(args.profile)
    config = build_config(args, profile.to_config())
    data_files = args.input or list(profile.data_files)
    logger.info(
        "Profile: %s (top_k=%d, min_cooccurrence=%d)",
        profile.name,
        config.top_k,
        config.min_cooccurrence,
    )

    publishers = []
    if args.output:
        publishers.append(JsonPayloadPublisher(output_path=args.output))

    pipeline = VisualizationPipeline(
        adapter=SpreadsheetAdapter(
            data_files=data_files,
            base_dir=args.data_root or profile.data_root,
        ),
        engine=AggregationEngine(config),
        validator=None if args.skip_validation else PayloadValidator(),
        publishers=publishers,
    )

    try:
        report = pipeline.run()
    except MissingInputError as exc:
        logger.error("%s", exc)
        return EXIT_MISSING_INPUT
    except EmptyInputError as exc:
        logger.error("%s", exc)
        return EXIT_EMPTY_INPUT
    except CampyvizError as exc:
        logger.error("Aggregation failed: %s", exc)
        return EXIT_INTERNAL_FAILURE

    summary = {
        "profile": profile.name,
        "gene_records": report.gene_records,
        "distinct_genes": report.distinct_genes,
        "hosts": report.hosts,
        "cooccurrence_links": report.cooccurrence_links,
        "output": args.output,
    }
    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
