import math
import sys
from pathlib import Path

import pandas as pd
import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from campyviz.adapters import ColumnLayout, RowsAdapter, SpreadsheetAdapter  # noqa: E402
from campyviz.errors import EmptyInputError, MissingInputError  # noqa: E402

HEADER = ["Gene name", "Cluster", "Function / role", "Species", "Host", "Notes"]


def _rows() -> list[list[object]]:
    return [
        HEADER,
        ["cadF", "adhesins", "Adhesion", "C. jejuni", "Chicken; Human", "fibronectin binding"],
        ["", "adhesins", "Adhesion", "C. jejuni", "Poultry", ""],
        ["cdtB", None, "toxin, cdt", "jejuni, coli", "cattle", None],
        ["flaA", "flagella", "", "C. lari", "", "no host recorded"],
    ]


def _write_excel(path: Path, rows: list[list[object]]) -> None:
    pd.DataFrame(rows).to_excel(path, index=False, header=False)


def test_column_layout_matches_headers_case_insensitively() -> None:
    layout = ColumnLayout.from_header(["GENE", "Role", "species", "Host animal", "Comment"])

    assert layout.gene_name == 0
    assert layout.function == 1
    assert layout.species == 2
    assert layout.host == 3
    assert layout.notes == 4
    assert layout.cluster is None


def test_rows_adapter_parses_and_normalizes_cells() -> None:
    records = list(RowsAdapter(_rows()).read())

    assert [record.gene_name for record in records] == ["cadF", "cdtB", "flaA"]

    cadf = records[0]
    assert cadf.cluster == "adhesins"
    assert cadf.function == "Adhesion"
    assert cadf.species == ("jejuni",)
    assert cadf.hosts == ("Poultry", "Human")
    assert cadf.notes == "fibronectin binding"

    cdtb = records[1]
    assert cdtb.cluster == ""
    assert cdtb.species == ("jejuni", "coli")
    assert cdtb.hosts == ("Cattle",)
    assert cdtb.notes == ""

    flaa = records[2]
    assert flaa.function == ""
    assert flaa.species == ("C. lari",)
    assert flaa.hosts == ()


def test_rows_adapter_defaults_missing_columns() -> None:
    records = list(RowsAdapter([["Gene"], ["cadF"], [math.nan], [7]]).read())

    assert [record.gene_name for record in records] == ["cadF", "7"]
    assert records[0].function == "Unknown"
    assert records[0].cluster is None
    assert records[0].notes is None
    assert records[0].to_row() == {
        "geneName": "cadF",
        "function": "Unknown",
        "species": [],
        "hosts": [],
    }


def test_rows_adapter_tolerates_short_rows() -> None:
    records = list(RowsAdapter([HEADER, ["cadF"]]).read())

    assert records[0].species == ()
    assert records[0].hosts == ()
    assert records[0].function == ""


def test_rows_adapter_rejects_header_only_input() -> None:
    with pytest.raises(EmptyInputError):
        RowsAdapter([HEADER]).read()

    with pytest.raises(EmptyInputError):
        RowsAdapter([]).read()


def test_spreadsheet_adapter_reads_first_sheet_of_excel(tmp_path: Path) -> None:
    path = tmp_path / "campylobacter.xlsx"
    _write_excel(path, _rows())

    records = list(SpreadsheetAdapter(data_files=[path]).read())

    assert [record.gene_name for record in records] == ["cadF", "cdtB", "flaA"]
    assert records[0].hosts == ("Poultry", "Human")
    assert records[1].species == ("jejuni", "coli")


def test_spreadsheet_adapter_falls_back_to_next_candidate(tmp_path: Path) -> None:
    data_dir = tmp_path / "public" / "data"
    data_dir.mkdir(parents=True)
    _write_excel(data_dir / "campylobacter (1).xlsx", _rows())

    adapter = SpreadsheetAdapter(base_dir=tmp_path)
    records = list(adapter.read())

    assert len(records) == 3


def test_spreadsheet_adapter_reads_csv(tmp_path: Path) -> None:
    path = tmp_path / "genes.csv"
    path.write_text("Gene,Host,Species\ncadF,Poultry,jejuni\nciaB,Swine,coli\n")

    records = list(SpreadsheetAdapter(data_files=str(path)).read())

    assert [record.gene_name for record in records] == ["cadF", "ciaB"]
    assert records[1].hosts == ("Swine",)


def test_spreadsheet_adapter_expands_environment_variables(monkeypatch, tmp_path: Path) -> None:
    path = tmp_path / "genes.csv"
    path.write_text("Gene,Host\ncadF,Poultry\n")
    monkeypatch.setenv("CAMPYVIZ_DATA_TEST", str(tmp_path))

    records = list(SpreadsheetAdapter(data_files="$CAMPYVIZ_DATA_TEST/genes.csv").read())

    assert records[0].gene_name == "cadF"


def test_spreadsheet_adapter_reports_every_missing_candidate(tmp_path: Path) -> None:
    adapter = SpreadsheetAdapter(data_files=["a.xlsx", "b.xlsx"], base_dir=tmp_path)

    with pytest.raises(MissingInputError) as excinfo:
        adapter.read()

    assert excinfo.value.tried_paths == [tmp_path / "a.xlsx", tmp_path / "b.xlsx"]
    assert isinstance(excinfo.value, FileNotFoundError)


@pytest.mark.parametrize("content", ["", "Gene,Host\n"])
def test_spreadsheet_adapter_rejects_empty_sheets(tmp_path: Path, content: str) -> None:
    path = tmp_path / "empty.csv"
    path.write_text(content)

    with pytest.raises(EmptyInputError):
        SpreadsheetAdapter(data_files=[path]).read()
