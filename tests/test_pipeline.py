import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from campyviz import (  # noqa: E402
    AggregationFailure,
    DataAdapter,
    EmptyInputError,
    JsonPayloadPublisher,
    MissingInputError,
    PayloadValidator,
    Publisher,
    RowsAdapter,
    SpreadsheetAdapter,
    VisualizationPipeline,
)

ROWS = [
    ["Gene", "Cluster", "Function", "Species", "Host", "Notes"],
    ["cadF", "adhesins", "adhesion", "jejuni", "Poultry", "fibronectin"],
    ["cadF", "adhesins", "adhesion", "jejuni", "Human", ""],
    ["cdtB", "cdt", "toxin, cdt", "jejuni,coli", "Poultry", ""],
]


class _ExplodingAdapter(DataAdapter):
    name = "exploding"

    def read(self):
        raise KeyError("gene")


class _RecordingPublisher(Publisher):
    def __init__(self) -> None:
        self.payloads: list[dict] = []

    def publish(self, payload: dict) -> None:
        self.payloads.append(payload)


def test_pipeline_reports_counts_and_publishes(tmp_path: Path) -> None:
    output_path = tmp_path / "out" / "data.json"
    recorder = _RecordingPublisher()

    report = VisualizationPipeline(
        adapter=RowsAdapter(ROWS),
        validator=PayloadValidator(),
        publishers=[JsonPayloadPublisher(output_path=output_path), recorder],
    ).run()

    assert report.gene_records == 3
    assert report.distinct_genes == 2
    assert report.hosts == 2
    assert report.cooccurrence_links == 0

    written = json.loads(output_path.read_text())
    assert written == report.payload
    assert recorder.payloads == [report.payload]
    assert written["genes"][0] == {
        "geneName": "cadF",
        "cluster": "adhesins",
        "function": "adhesion",
        "species": ["jejuni"],
        "hosts": ["Poultry"],
        "notes": "fibronectin",
    }


def test_pipeline_propagates_missing_and_empty_input(tmp_path: Path) -> None:
    recorder = _RecordingPublisher()

    with pytest.raises(MissingInputError):
        VisualizationPipeline(
            adapter=SpreadsheetAdapter(data_files=[tmp_path / "absent.xlsx"]),
            publishers=[recorder],
        ).run()

    with pytest.raises(EmptyInputError):
        VisualizationPipeline(adapter=RowsAdapter([ROWS[0]]), publishers=[recorder]).run()

    assert recorder.payloads == []


def test_pipeline_wraps_unexpected_errors_without_publishing() -> None:
    recorder = _RecordingPublisher()

    with pytest.raises(AggregationFailure) as excinfo:
        VisualizationPipeline(adapter=_ExplodingAdapter(), publishers=[recorder]).run()

    assert "KeyError" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, KeyError)
    assert recorder.payloads == []


def test_pipeline_treats_schema_violations_as_internal_failures(tmp_path: Path) -> None:
    schema_path = tmp_path / "strict.schema.json"
    schema_path.write_text(
        json.dumps(
            {
                "$schema": "https://json-schema.org/draft/2020-12/schema",
                "type": "object",
                "required": ["generatedAt"],
            }
        )
    )
    recorder = _RecordingPublisher()

    with pytest.raises(AggregationFailure) as excinfo:
        VisualizationPipeline(
            adapter=RowsAdapter(ROWS),
            validator=PayloadValidator(schema_path),
            publishers=[recorder],
        ).run()

    assert "generatedAt" in str(excinfo.value)
    assert recorder.payloads == []


def test_payload_validator_reports_every_violation() -> None:
    payload = VisualizationPipeline(adapter=RowsAdapter(ROWS)).run().payload
    validator = PayloadValidator()

    assert validator.validate(payload).ok

    payload.pop("sankeyData")
    payload["speciesMatrix"]["cadF"]["jejuni"] = "yes"
    payload["processes"]["metabolism"] = ["cadF"]

    result = validator.validate(payload)
    assert not result.ok
    paths = {issue.path for issue in result.issues}
    assert "/" in paths
    assert "/speciesMatrix/cadF/jejuni" in paths
    assert "/processes" in paths
