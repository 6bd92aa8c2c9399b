"""Interface contracts for rolling_topics.

This module exports all Protocol-based interfaces for dependency injection.
"""

from rolling_topics.interfaces.estimator import ChunkEstimatorInterface
from rolling_topics.interfaces.storage import StateStorageInterface
from rolling_topics.interfaces.vocabulary import VocabularyBuilderInterface

__all__ = [
    "ChunkEstimatorInterface",
    "StateStorageInterface",
    "VocabularyBuilderInterface",
]
