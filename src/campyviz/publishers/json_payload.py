"""Static JSON publisher for the chart front-end."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from campyviz.publishers.base import Publisher

logger = logging.getLogger(__name__)


class JsonPayloadPublisher(Publisher):
    """Write the aggregate payload to a single JSON file.

    Charts fetch this file instead of calling the data endpoint when the site is
    deployed as static assets.
    """

    def __init__(
        self,
        *,
        output_path: str | Path,
        indent: int | None = 2,
    ) -> None:
        self.output_path = Path(output_path)
        self.indent = indent

    def publish(self, payload: dict[str, Any]) -> None:
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.output_path.with_suffix(self.output_path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as stream:
            json.dump(payload, stream, indent=self.indent, ensure_ascii=False)
        tmp_path.replace(self.output_path)
        logger.info("Wrote aggregate payload to %s", self.output_path)
