"""Resolved chunk/memory windows for rolling_topics."""

from datetime import date, timedelta

from pydantic import BaseModel, model_validator

__all__ = [
    "ResolvedWindows",
]


class ResolvedWindows(BaseModel, frozen=True):
    """Concrete chunk boundaries and their memory cutoffs.

    Attributes:
        chunks: Sorted chunk start dates
        memory: Sorted memory cutoffs, one per chunk
        last_date: Latest new document date
    """

    chunks: tuple[date, ...]
    memory: tuple[date, ...]
    last_date: date

    @model_validator(mode="after")
    def _check_lengths(self) -> "ResolvedWindows":
        if len(self.chunks) != len(self.memory):
            raise ValueError("chunks and memory must have equal length")
        return self

    def __len__(self) -> int:
        return len(self.chunks)

    @property
    def upper_bounds(self) -> tuple[date, ...]:
        """Exclusive upper bound of each chunk.

        Each chunk ends where the next one starts; the last one ends the day
        after the latest new document, so every new document falls into
        exactly one half-open interval.
        """
        return (*self.chunks[1:], self.last_date + timedelta(days=1))

    def intervals(self) -> list[tuple[date, date, date]]:
        """(memory cutoff, chunk start, exclusive end) per chunk."""
        return list(zip(self.memory, self.chunks, self.upper_bounds, strict=True))
