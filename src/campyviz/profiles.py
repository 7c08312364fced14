"""Aggregation profile loader for campyviz runs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from campyviz.config import DEFAULT_DATA_FILES, AggregationConfig


@dataclass(frozen=True)
class AggregationProfile:
    """Serializable profile naming the source workbook and engine parameters."""

    name: str
    description: str
    data_files: tuple[str, ...]
    data_root: str | None
    top_k: int
    min_cooccurrence: int
    prevalence_precision: int

    def to_config(self) -> AggregationConfig:
        """Convert profile into runtime engine parameters."""

        return AggregationConfig(
            top_k=self.top_k,
            min_cooccurrence=self.min_cooccurrence,
            prevalence_precision=self.prevalence_precision,
        )


class AggregationProfileLoader:
    """Load profile JSON from ``config/profiles`` or a custom path."""

    def __init__(self, profiles_dir: str | Path | None = None) -> None:
        if profiles_dir is None:
            profiles_dir = Path(__file__).resolve().parents[2] / "config" / "profiles"
        self.profiles_dir = Path(profiles_dir)

    def list_profiles(self) -> list[str]:
        """Return available profile names from the configured profile directory."""

        return sorted(path.stem for path in self.profiles_dir.glob("*.json"))

    def load(self, name_or_path: str | Path) -> AggregationProfile:
        """Load a profile by name (for example, ``campylobacter``) or explicit path."""

        path = self._resolve_path(name_or_path)
        payload = json.loads(path.read_text())
        return self._parse(payload)

    def _resolve_path(self, name_or_path: str | Path) -> Path:
        requested = Path(name_or_path)

        if requested.is_file():
            return requested

        candidate = self.profiles_dir / f"{requested}.json"
        if candidate.exists():
            return candidate

        raise FileNotFoundError(
            f"Profile not found: {name_or_path}. Available: {', '.join(self.list_profiles())}"
        )

    def _parse(self, payload: dict[str, Any]) -> AggregationProfile:
        data_files = payload.get("data_files") or list(DEFAULT_DATA_FILES)
        if isinstance(data_files, str):
            data_files = [data_files]

        defaults = AggregationConfig()
        data_root = payload.get("data_root")
        return AggregationProfile(
            name=str(payload["name"]),
            description=str(payload.get("description", "")),
            data_files=tuple(str(item) for item in data_files),
            data_root=str(data_root) if data_root is not None else None,
            top_k=int(payload.get("top_k", defaults.top_k)),
            min_cooccurrence=int(payload.get("min_cooccurrence", defaults.min_cooccurrence)),
            prevalence_precision=int(
                payload.get("prevalence_precision", defaults.prevalence_precision)
            ),
        )
