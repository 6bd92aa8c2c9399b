"""Storage interface for rolling_topics.

This module defines the Protocol for persisting model states.
"""

from typing import Protocol, runtime_checkable

from rolling_topics.models.state import ModelState

__all__ = [
    "StateStorageInterface",
]


@runtime_checkable
class StateStorageInterface(Protocol):
    """Contract for model state persistence."""

    def save(self, state: ModelState) -> None:
        """Persist a state, replacing any earlier version with the same ID."""
        ...

    def load(self, model_id: str) -> ModelState:
        """Load a state by model ID.

        Raises:
            KeyError: If no state is stored under model_id
        """
        ...

    def exists(self, model_id: str) -> bool:
        ...
