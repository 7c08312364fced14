"""campyviz output publishers."""

from .base import Publisher
from .json_payload import JsonPayloadPublisher

__all__ = [
    "Publisher",
    "JsonPayloadPublisher",
]
