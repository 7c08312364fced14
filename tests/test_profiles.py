import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from campyviz import AggregationProfileLoader  # noqa: E402


def test_profile_loader_lists_default_profiles() -> None:
    loader = AggregationProfileLoader()

    assert "campylobacter" in loader.list_profiles()


def test_default_profile_matches_engine_defaults() -> None:
    profile = AggregationProfileLoader().load("campylobacter")

    assert profile.data_files == (
        "public/data/campylobacter.xlsx",
        "public/data/campylobacter (1).xlsx",
    )
    config = profile.to_config()
    assert config.top_k == 20
    assert config.min_cooccurrence == 3
    assert config.prevalence_precision == 2


def test_profile_loader_accepts_explicit_path_and_fills_defaults(tmp_path: Path) -> None:
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"name": "custom", "data_files": "genes.csv", "top_k": 5}))

    profile = AggregationProfileLoader(profiles_dir=tmp_path).load(path)

    assert profile.name == "custom"
    assert profile.data_files == ("genes.csv",)
    assert profile.data_root is None
    assert profile.to_config().top_k == 5
    assert profile.to_config().min_cooccurrence == 3


def test_profile_loader_names_available_profiles_when_missing(tmp_path: Path) -> None:
    (tmp_path / "alpha.json").write_text(json.dumps({"name": "alpha"}))

    with pytest.raises(FileNotFoundError) as excinfo:
        AggregationProfileLoader(profiles_dir=tmp_path).load("beta")

    assert "alpha" in str(excinfo.value)
