"""Rolling update controller for rolling_topics.

This module provides the main entry points of the package: fitting an
initial model and rolling it forward over new, later-dated chunks of texts.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from functools import reduce
from typing import Any

from rolling_topics.config import RollingTopicsConfig
from rolling_topics.errors import ChunkStepError, ValidationError
from rolling_topics.interfaces.estimator import ChunkEstimatorInterface
from rolling_topics.logging import get_logger
from rolling_topics.models.chunk import ChunkRecord
from rolling_topics.models.params import VocabParams
from rolling_topics.models.state import ModelState
from rolling_topics.models.step import Applied, SkipReason
from rolling_topics.services.chunk_step import ChunkStepExecutor
from rolling_topics.services.date_windows import ChunkSpec, DateWindowResolver, MemorySpec
from rolling_topics.utils.dates import as_date
from rolling_topics.utils.hashing import generate_model_id

__all__ = [
    "RollingUpdateController",
    "UpdateResult",
    "create_initial_model",
    "update_model",
]

logger = get_logger(__name__)

Texts = Mapping[str, Sequence[str]]
Dates = Mapping[str, Any] | Sequence[Any]
Params = VocabParams | Mapping[str, Any] | None


@dataclass
class UpdateResult:
    """Outcome of a (possibly multi-chunk) update."""

    state: ModelState
    chunks_total: int = 0
    chunks_applied: int = 0
    skipped: list[SkipReason] = field(default_factory=list)
    fallback_dates: list[date] = field(default_factory=list)

    @property
    def chunks_skipped(self) -> int:
        return len(self.skipped)


@dataclass(frozen=True)
class _Chunk:
    index: int
    texts: dict[str, tuple[str, ...]]
    dates: dict[str, date]
    memory: date


def _normalize_inputs(
    texts: Texts,
    dates: Dates,
) -> tuple[dict[str, tuple[str, ...]], dict[str, date]]:
    """Validate texts and align dates to them by document ID.

    Unnamed dates (a sequence) follow the order of texts.
    """
    if not isinstance(texts, Mapping):
        raise ValidationError("texts must be a mapping of document ID to tokens")
    normalized: dict[str, tuple[str, ...]] = {}
    for doc_id, tokens in texts.items():
        if isinstance(tokens, str) or not all(isinstance(token, str) for token in tokens):
            raise ValidationError(f"text {doc_id!r} must be a sequence of string tokens")
        normalized[str(doc_id)] = tuple(tokens)

    if isinstance(dates, Mapping):
        if {str(key) for key in dates} != normalized.keys():
            raise ValidationError("named dates must have the same IDs as texts")
        aligned = {str(key): as_date(value) for key, value in dates.items()}
        return normalized, {doc_id: aligned[doc_id] for doc_id in normalized}

    if isinstance(dates, str):
        raise ValidationError("dates must be a sequence or a mapping, not a string")
    values = list(dates)
    if len(values) != len(normalized):
        raise ValidationError(f"got {len(values)} dates for {len(normalized)} texts")
    return normalized, dict(zip(normalized, (as_date(v) for v in values), strict=True))


class RollingUpdateController:
    """Roll a topic model forward over time-ordered chunks.

    Every chunk step takes the previous immutable state and returns the next;
    the chunk sequence is folded strictly in temporal order.

    If a chunk after the first fails, the update raises ChunkStepError
    carrying the last committed state as ``partial_state``; the caller's
    input state is never changed.

    Example:
        controller = RollingUpdateController(estimator)
        result = controller.update(state, texts, dates, chunks="month", memory="month")
        state = result.state
    """

    def __init__(
        self,
        estimator: ChunkEstimatorInterface,
        config: RollingTopicsConfig | None = None,
        resolver: DateWindowResolver | None = None,
    ) -> None:
        """Initialize controller with its collaborators.

        Args:
            estimator: Estimator for initial and per-chunk fits
            config: Settings (default: loaded from environment / .env)
            resolver: Window resolver (default: DateWindowResolver())
        """
        self._estimator = estimator
        self._config = config or RollingTopicsConfig()
        self._resolver = resolver or DateWindowResolver()
        self._executor = ChunkStepExecutor(estimator)

    # === INITIAL FIT ===

    def create(
        self,
        texts: Texts,
        dates: Dates,
        params: Params = None,
        *,
        init: date | str | None = None,
        chunks: ChunkSpec = None,
        memory: MemorySpec = None,
        compute_topics: bool | None = None,
        memory_fallback: int | None = None,
        model_id: str | None = None,
    ) -> UpdateResult:
        """Fit an initial model, optionally rolling on over later texts.

        Args:
            texts: Document ID -> token sequence
            dates: Dates aligned with texts (mapping by ID, or sequence by order)
            params: Thresholds (default: config.vocab), partial dicts allowed
            init: If given, only texts dated before init are fitted initially;
                the rest are passed to update() with chunks and memory
            chunks: Chunk boundaries for texts on or after init
            memory: Memory cutoffs for texts on or after init
            compute_topics: Compute the topic matrix at the end
            memory_fallback: Memory fallback for the rolling part
            model_id: Explicit ID (default: derived from the initial corpus)

        Returns:
            UpdateResult with the fitted state
        """
        doc_texts, doc_dates = _normalize_inputs(texts, dates)
        defaults = VocabParams.build(**self._config.vocab.model_dump())
        resolved = defaults.merged(params)
        compute = self._config.compute_topics if compute_topics is None else compute_topics

        init_date = as_date(init) if init is not None else None
        initial_ids = [
            doc_id
            for doc_id, doc_date in doc_dates.items()
            if init_date is None or doc_date < init_date
        ]
        if not initial_ids:
            raise ValidationError("no texts to fit the initial model on")
        initial_texts = {doc_id: doc_texts[doc_id] for doc_id in initial_ids}
        initial_dates = {doc_id: doc_dates[doc_id] for doc_id in initial_ids}

        fit = self._estimator.fit_initial(initial_texts, resolved)
        state = ModelState(
            id=model_id
            or generate_model_id(
                initial_ids, min(initial_dates.values()), max(initial_dates.values())
            ),
            model=fit.model,
            documents=fit.documents,
            dates={doc_id: initial_dates[doc_id] for doc_id in fit.documents},
            vocabulary=fit.vocabulary,
            chunk_log=(
                ChunkRecord(
                    chunk_id=0,
                    start_date=min(initial_dates.values()),
                    end_date=max(initial_dates.values()),
                    n_new=len(fit.documents),
                    n_discarded=fit.n_discarded,
                    n_vocab=len(fit.vocabulary),
                ),
            ),
            parameters=resolved,
        )
        logger.info(
            "initial_model_fitted",
            model_id=state.id,
            n_docs=len(state.documents),
            n_vocab=len(state.vocabulary),
        )

        rest = [doc_id for doc_id in doc_texts if doc_id not in initial_texts]
        if not rest:
            if compute:
                state = self._with_topics(state)
            return UpdateResult(state=state, chunks_total=1, chunks_applied=1)

        result = self.update(
            state,
            {doc_id: doc_texts[doc_id] for doc_id in rest},
            {doc_id: doc_dates[doc_id] for doc_id in rest},
            chunks=chunks,
            memory=memory,
            compute_topics=compute,
            memory_fallback=memory_fallback,
        )
        result.chunks_total += 1
        result.chunks_applied += 1
        return result

    # === ROLLING UPDATE ===

    def update(
        self,
        state: ModelState,
        texts: Texts,
        dates: Dates,
        chunks: ChunkSpec = None,
        memory: MemorySpec = None,
        params: Params = None,
        compute_topics: bool | None = None,
        memory_fallback: int | None = None,
    ) -> UpdateResult:
        """Roll the model forward over new texts.

        Unspecified parameters inherit the prior model's stored parameter
        record; a partial dict overrides only the entries it names.

        Args:
            state: Current model state (not modified)
            texts: Document ID -> token sequence, all dated after the model
            dates: Dates aligned with texts (mapping by ID, or sequence by order)
            chunks: Chunk boundaries (dates, period string or None)
            memory: Memory cutoffs (dates, period string or count)
            params: Threshold overrides
            compute_topics: Compute the topic matrix after the last chunk
            memory_fallback: Fallback position if a chunk has no memory

        Returns:
            UpdateResult with the successor state and per-chunk statistics

        Raises:
            ValidationError: Malformed inputs or windows (before any chunk)
            ParameterError: Thresholds out of bounds (before any chunk)
            ChunkStepError: A chunk after the first failed
        """
        resolved = state.parameters.merged(params)
        compute = self._config.compute_topics if compute_topics is None else compute_topics
        fallback = self._config.memory_fallback if memory_fallback is None else memory_fallback
        if memory is None:
            memory = self._config.default_memory

        doc_texts, doc_dates = _normalize_inputs(texts, dates)
        if not doc_texts:
            outcome = self._executor.step(state, {}, {}, date.min, resolved, fallback)
            return UpdateResult(state=state, chunks_total=1, skipped=[outcome.reason])

        windows = self._resolver.resolve(state.dates.values(), doc_dates.values(), chunks, memory)

        # Assign each text to exactly one half-open chunk interval
        remaining = dict(doc_dates)
        plan: list[_Chunk] = []
        for index, (memory_date, _start, end) in enumerate(windows.intervals(), start=1):
            taken = [doc_id for doc_id, doc_date in remaining.items() if doc_date < end]
            plan.append(
                _Chunk(
                    index=index,
                    texts={doc_id: doc_texts[doc_id] for doc_id in taken},
                    dates={doc_id: remaining.pop(doc_id) for doc_id in taken},
                    memory=memory_date,
                )
            )

        total = len(plan)

        def apply(result: UpdateResult, chunk: _Chunk) -> UpdateResult:
            if total > 1:
                logger.info("fitting_chunk", chunk=chunk.index, total=total)
            try:
                outcome = self._executor.step(
                    result.state, chunk.texts, chunk.dates, chunk.memory, resolved, fallback
                )
            except Exception as e:
                if chunk.index == 1:
                    raise
                logger.error("chunk_failed", chunk=chunk.index, total=total, error=str(e))
                raise ChunkStepError(chunk.index, result.state, e) from e
            if isinstance(outcome, Applied):
                fallbacks = result.fallback_dates
                if outcome.fallback_memory_date is not None:
                    fallbacks = [*fallbacks, outcome.fallback_memory_date]
                return UpdateResult(
                    state=outcome.state,
                    chunks_total=total,
                    chunks_applied=result.chunks_applied + 1,
                    skipped=result.skipped,
                    fallback_dates=fallbacks,
                )
            return UpdateResult(
                state=result.state,
                chunks_total=total,
                chunks_applied=result.chunks_applied,
                skipped=[*result.skipped, outcome.reason],
                fallback_dates=result.fallback_dates,
            )

        result = reduce(apply, plan, UpdateResult(state=state, chunks_total=total))

        if compute and result.chunks_applied:
            result.state = self._with_topics(result.state)

        logger.info(
            "model_update_completed",
            model_id=state.id,
            chunks=total,
            applied=result.chunks_applied,
            skipped=result.chunks_skipped,
        )
        return result

    def _with_topics(self, state: ModelState) -> ModelState:
        logger.info("computing_topic_matrix", model_id=state.id)
        model = self._estimator.compute_topics(state.model, state.documents, state.vocabulary)
        return state.model_copy(update={"model": model})


def create_initial_model(
    texts: Texts,
    dates: Dates,
    estimator: ChunkEstimatorInterface,
    params: Params = None,
    **kwargs: Any,
) -> ModelState:
    """Fit an initial rolling model; see RollingUpdateController.create."""
    return RollingUpdateController(estimator).create(texts, dates, params, **kwargs).state


def update_model(
    state: ModelState,
    texts: Texts,
    dates: Dates,
    estimator: ChunkEstimatorInterface,
    chunks: ChunkSpec = None,
    memory: MemorySpec = None,
    params: Params = None,
    compute_topics: bool = True,
    memory_fallback: int = 0,
) -> ModelState:
    """Roll a model forward over new texts; see RollingUpdateController.update."""
    controller = RollingUpdateController(estimator)
    return controller.update(
        state,
        texts,
        dates,
        chunks=chunks,
        memory=memory,
        params=params,
        compute_topics=compute_topics,
        memory_fallback=memory_fallback,
    ).state
