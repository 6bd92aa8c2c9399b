"""Estimator result models for rolling_topics."""

from typing import Any

from pydantic import BaseModel, Field

__all__ = [
    "ChunkFit",
    "InitialFit",
]


class ChunkFit(BaseModel, frozen=True):
    """Result of fitting one chunk.

    Attributes:
        model: Updated estimator state
        documents: Surviving memory and newly admitted documents, preprocessed
        n_new: Number of new documents admitted
        n_discarded: Number of new documents dropped
        vocabulary: Rebuilt vocabulary
    """

    model: Any
    documents: dict[str, tuple[str, ...]]
    n_new: int = Field(ge=0)
    n_discarded: int = Field(ge=0)
    vocabulary: tuple[str, ...]


class InitialFit(BaseModel, frozen=True):
    """Result of the initial (non-incremental) fit."""

    model: Any
    documents: dict[str, tuple[str, ...]]
    n_discarded: int = Field(default=0, ge=0)
    vocabulary: tuple[str, ...]
