"""Infrastructure implementations for rolling_topics."""

from rolling_topics.infra.json_store import JsonStateRepository

__all__ = ["JsonStateRepository"]
