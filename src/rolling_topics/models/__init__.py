"""Public models for rolling_topics.

This module exports all public data models.
"""

from rolling_topics.models.chunk import ChunkRecord
from rolling_topics.models.fit import ChunkFit, InitialFit
from rolling_topics.models.params import VocabParams
from rolling_topics.models.state import ModelState
from rolling_topics.models.step import Applied, SkipReason, Skipped, StepOutcome
from rolling_topics.models.windows import ResolvedWindows

__all__ = [
    "Applied",
    "ChunkFit",
    "ChunkRecord",
    "InitialFit",
    "ModelState",
    "ResolvedWindows",
    "SkipReason",
    "Skipped",
    "StepOutcome",
    "VocabParams",
]
