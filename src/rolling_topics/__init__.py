"""rolling_topics - Incremental rolling updates for time-sliced topic models.

This package keeps a topic model current over a growing, time-ordered
corpus. New documents arrive in dated chunks; each chunk is fitted from a
sliding memory window of recent documents instead of the full history, so
topic identities stay comparable over time.

Example usage:
    from rolling_topics import create_initial_model, update_model

    state = create_initial_model(texts, dates, estimator, init="2008-05-01",
                                 chunks="month", memory="month")
    state = update_model(state, new_texts, new_dates, estimator,
                         chunks="month", memory="month")
    state.get_chunks()
"""

__version__ = "0.1.0"

from rolling_topics.config import RollingTopicsConfig
from rolling_topics.controller import (
    RollingUpdateController,
    UpdateResult,
    create_initial_model,
    update_model,
)
from rolling_topics.errors import (
    ChunkSpecError,
    ChunkStepError,
    DateRangeError,
    MemoryRangeError,
    OrderError,
    ParameterError,
    RollingTopicsError,
    ValidationError,
)
from rolling_topics.infra.json_store import JsonStateRepository
from rolling_topics.interfaces.estimator import ChunkEstimatorInterface
from rolling_topics.interfaces.storage import StateStorageInterface
from rolling_topics.interfaces.vocabulary import VocabularyBuilderInterface
from rolling_topics.models.chunk import ChunkRecord
from rolling_topics.models.params import VocabParams
from rolling_topics.models.state import ModelState
from rolling_topics.models.step import Applied, SkipReason, Skipped
from rolling_topics.services.chunk_step import ChunkStepExecutor
from rolling_topics.services.date_windows import DateWindowResolver
from rolling_topics.services.vocabulary import ThresholdVocabularyBuilder

__all__ = [  # noqa: RUF022
    # Entry points
    "create_initial_model",
    "update_model",
    "RollingUpdateController",
    "UpdateResult",
    # Services
    "ChunkStepExecutor",
    "DateWindowResolver",
    "ThresholdVocabularyBuilder",
    # Models
    "Applied",
    "ChunkRecord",
    "ModelState",
    "SkipReason",
    "Skipped",
    "VocabParams",
    # Implementations
    "JsonStateRepository",
    # Interfaces
    "ChunkEstimatorInterface",
    "StateStorageInterface",
    "VocabularyBuilderInterface",
    # Config
    "RollingTopicsConfig",
    # Errors
    "ChunkSpecError",
    "ChunkStepError",
    "DateRangeError",
    "MemoryRangeError",
    "OrderError",
    "ParameterError",
    "RollingTopicsError",
    "ValidationError",
]
