"""Publisher interface for campyviz outputs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Publisher(ABC):
    """Publishes the aggregate payload into consumer-facing artifacts."""

    @abstractmethod
    def publish(self, payload: dict[str, Any]) -> None:
        """Publish the payload into output targets."""
