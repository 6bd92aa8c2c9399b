"""Single chunk update for rolling_topics.

This module provides the executor that selects a chunk's memory documents,
calls the estimator once and splices the result into a successor state.
"""

from collections.abc import Mapping, Sequence
from datetime import date

from rolling_topics.errors import DateRangeError, ParameterError, ValidationError
from rolling_topics.interfaces.estimator import ChunkEstimatorInterface
from rolling_topics.logging import get_logger
from rolling_topics.models.chunk import ChunkRecord
from rolling_topics.models.params import VocabParams
from rolling_topics.models.state import ModelState
from rolling_topics.models.step import Applied, SkipReason, Skipped, StepOutcome

__all__ = [
    "ChunkStepExecutor",
]

logger = get_logger(__name__)


class ChunkStepExecutor:
    """Apply one chunk of new documents to a model state.

    The memory window is every modeled document dated on or after the
    memory cutoff. Memory documents are replaced wholesale by the
    estimator's output; documents outside the window are kept as they are.

    Example:
        executor = ChunkStepExecutor(estimator)
        outcome = executor.step(state, texts, dates, date(2008, 4, 1), params)
        if isinstance(outcome, Applied):
            state = outcome.state
    """

    def __init__(self, estimator: ChunkEstimatorInterface) -> None:
        """Initialize executor with its estimator.

        Args:
            estimator: Estimator performing the single-chunk fit
        """
        self._estimator = estimator

    def step(
        self,
        state: ModelState,
        new_texts: Mapping[str, Sequence[str]],
        new_dates: Mapping[str, date],
        memory_date: date,
        params: VocabParams,
        memory_fallback: int = 0,
    ) -> StepOutcome:
        """Fit one chunk.

        Args:
            state: Current model state (not modified)
            new_texts: Document ID -> token sequence for this chunk
            new_dates: Document ID -> date, same keys as new_texts
            memory_date: Memory cutoff for this chunk
            params: Thresholds for the vocabulary and document rules
            memory_fallback: If no memory document exists, use the date of the
                memory_fallback-th most recent modeled document instead
                (0 skips the chunk)

        Returns:
            Applied with the successor state, or Skipped with a reason

        Raises:
            ParameterError: memory_fallback is negative
            ValidationError: texts and dates are not aligned
            DateRangeError: new dates are not after the model or precede memory
        """
        if (
            isinstance(memory_fallback, bool)
            or not isinstance(memory_fallback, int)
            or memory_fallback < 0
        ):
            raise ParameterError(
                f"memory_fallback must be a non-negative integer, got {memory_fallback!r}"
            )

        if not new_texts:
            logger.warning("chunk_skipped", reason=str(SkipReason.EMPTY))
            return Skipped(reason=SkipReason.EMPTY)

        self._check_dates(state, new_texts, new_dates, memory_date)

        memory_ids = state.ids_since(memory_date)
        fallback_date: date | None = None
        if not memory_ids:
            if memory_fallback > 0 and state.dates:
                memory_date = state.nth_latest_date(memory_fallback)
                fallback_date = memory_date
                memory_ids = state.ids_since(memory_date)
                logger.warning(
                    "memory_fallback_applied",
                    memory_fallback=memory_fallback,
                    memory_date=str(memory_date),
                )
            else:
                logger.warning("chunk_skipped", reason=str(SkipReason.NO_MEMORY))
                return Skipped(reason=SkipReason.NO_MEMORY)

        memory_docs = state.get_docs(memory_ids)
        fit = self._estimator.fit_chunk(
            model=state.model,
            memory_docs=memory_docs,
            new_texts=new_texts,
            vocabulary=state.vocabulary,
            params=params,
        )

        record = ChunkRecord(
            chunk_id=state.last_chunk_id + 1,
            start_date=min(new_dates.values()),
            end_date=max(new_dates.values()),
            memory_date=memory_date,
            n_new=fit.n_new,
            n_discarded=fit.n_discarded,
            n_memory=len(memory_ids),
            n_vocab=len(fit.vocabulary),
        )

        # Memory documents are evicted and re-inserted only if the fit kept them
        evicted = set(memory_ids)
        documents = {
            doc_id: tokens for doc_id, tokens in state.documents.items() if doc_id not in evicted
        }
        documents.update(fit.documents)

        dates: dict[str, date] = {}
        for doc_id in documents:
            if doc_id in new_dates:
                dates[doc_id] = new_dates[doc_id]
            elif doc_id in state.dates:
                dates[doc_id] = state.dates[doc_id]
            else:
                raise ValidationError(f"estimator returned unknown document {doc_id!r}")

        successor = ModelState(
            id=state.id,
            model=fit.model,
            documents=documents,
            dates=dates,
            vocabulary=fit.vocabulary,
            chunk_log=(*state.chunk_log, record),
            parameters=params,
        )

        logger.debug(
            "chunk_applied",
            chunk_id=record.chunk_id,
            n_new=record.n_new,
            n_discarded=record.n_discarded,
            n_memory=record.n_memory,
            n_vocab=record.n_vocab,
        )
        return Applied(state=successor, fallback_memory_date=fallback_date)

    def _check_dates(
        self,
        state: ModelState,
        new_texts: Mapping[str, Sequence[str]],
        new_dates: Mapping[str, date],
        memory_date: date,
    ) -> None:
        if new_texts.keys() != new_dates.keys():
            raise ValidationError("texts and dates must have identical document IDs")
        first = min(new_dates.values())
        max_date = state.max_date
        if max_date is not None and first <= max_date:
            raise DateRangeError(f"new dates must be after {max_date}, earliest is {first}")
        if first < memory_date:
            raise DateRangeError(
                f"new dates must not precede memory {memory_date}, earliest is {first}"
            )
