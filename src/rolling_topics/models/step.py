"""Chunk step outcome models for rolling_topics.

A chunk step either applies (producing a successor state) or is skipped
for a recorded reason; callers match on the type, not on log text.
"""

from datetime import date
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel

from rolling_topics.models.state import ModelState

__all__ = [
    "Applied",
    "SkipReason",
    "Skipped",
    "StepOutcome",
]


class SkipReason(StrEnum):
    """Why a chunk was left out."""

    EMPTY = "empty"
    """No new texts fall into the chunk"""

    NO_MEMORY = "no_memory"
    """No modeled document lies inside the memory window and no fallback is set"""


class Applied(BaseModel, frozen=True):
    """Chunk was fitted; ``state`` is the successor."""

    kind: Literal["applied"] = "applied"
    state: ModelState
    fallback_memory_date: date | None = None


class Skipped(BaseModel, frozen=True):
    """Chunk was not fitted; the input state stays current."""

    kind: Literal["skipped"] = "skipped"
    reason: SkipReason


StepOutcome = Applied | Skipped
