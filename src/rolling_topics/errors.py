"""Exception taxonomy for rolling_topics.

All validation errors are raised before any state is produced, so a
failed call never leaves a half-built ModelState behind.
"""

from typing import Any

__all__ = [
    "ChunkSpecError",
    "ChunkStepError",
    "DateRangeError",
    "MemoryRangeError",
    "OrderError",
    "ParameterError",
    "RollingTopicsError",
    "ValidationError",
]


class RollingTopicsError(Exception):
    """Base class for all rolling_topics errors."""


class ValidationError(RollingTopicsError, ValueError):
    """Malformed input shape or type (texts, dates, windows)."""


class DateRangeError(ValidationError):
    """New dates are not strictly after the modeled dates, or precede memory."""


class ChunkSpecError(ValidationError):
    """Chunk boundaries cannot be resolved against the new dates."""


class MemoryRangeError(ValidationError):
    """A memory date lies after its chunk boundary or cannot be resolved."""


class OrderError(ValidationError):
    """Resolved chunk or memory dates are not sorted."""


class ParameterError(RollingTopicsError, ValueError):
    """Threshold parameter outside of its documented bounds."""


class ChunkStepError(RollingTopicsError):
    """A chunk failed after earlier chunks of the same update were applied.

    Attributes:
        chunk_index: 1-based index of the failing chunk
        partial_state: Last state committed before the failure
    """

    def __init__(self, chunk_index: int, partial_state: Any, cause: BaseException) -> None:
        super().__init__(f"chunk {chunk_index} failed: {cause}")
        self.chunk_index = chunk_index
        self.partial_state = partial_state
