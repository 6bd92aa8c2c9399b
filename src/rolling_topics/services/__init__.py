"""Service layer for rolling_topics.

This module exports the main service entry points.
"""

from rolling_topics.services.chunk_step import ChunkStepExecutor
from rolling_topics.services.date_windows import ChunkSpec, DateWindowResolver, MemorySpec
from rolling_topics.services.vocabulary import DocumentFilterResult, ThresholdVocabularyBuilder

__all__ = [
    "ChunkSpec",
    "ChunkStepExecutor",
    "DateWindowResolver",
    "DocumentFilterResult",
    "MemorySpec",
    "ThresholdVocabularyBuilder",
]
