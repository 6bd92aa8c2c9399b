"""Chunk audit record for rolling_topics."""

from datetime import date

from pydantic import BaseModel, Field

__all__ = [
    "ChunkRecord",
]


class ChunkRecord(BaseModel, frozen=True):
    """One row of the per-chunk audit table.

    Records are append-only; one is added per applied chunk.

    Attributes:
        chunk_id: Strictly increasing chunk number (0 is the initial fit)
        start_date: Earliest date among the chunk's new documents
        end_date: Latest date among the chunk's new documents
        memory_date: Memory cutoff actually used (None for the initial fit)
        n_new: Number of newly admitted documents
        n_discarded: Number of new documents dropped by the thresholds
        n_memory: Number of memory documents re-used
        n_vocab: Vocabulary size after the chunk
    """

    chunk_id: int = Field(ge=0)
    start_date: date
    end_date: date
    memory_date: date | None = None
    n_new: int = Field(ge=0)
    n_discarded: int = Field(default=0, ge=0)
    n_memory: int = Field(default=0, ge=0)
    n_vocab: int = Field(ge=0)
