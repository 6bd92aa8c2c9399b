"""Unit tests for ChunkStepExecutor."""

from datetime import date
from unittest.mock import MagicMock

import pytest
from mocks.mock_estimator import StubEstimator

from rolling_topics.errors import DateRangeError, ParameterError, ValidationError
from rolling_topics.models.params import VocabParams
from rolling_topics.models.state import ModelState
from rolling_topics.models.step import Applied, SkipReason, Skipped
from rolling_topics.services.chunk_step import ChunkStepExecutor

MAY_TEXTS = {"m1": ["oil", "price", "oil"], "m2": ["bank", "rate", "loan"]}
MAY_DATES = {"m1": date(2008, 5, 2), "m2": date(2008, 5, 9)}


class TestChunkStepExecutor:
    """Tests for ChunkStepExecutor."""

    def test_applies_chunk(
        self,
        initial_state: ModelState,
        estimator: StubEstimator,
        params: VocabParams,
    ) -> None:
        executor = ChunkStepExecutor(estimator)

        outcome = executor.step(initial_state, MAY_TEXTS, MAY_DATES, date(2008, 4, 1), params)

        assert isinstance(outcome, Applied)
        state = outcome.state
        record = state.chunk_log[-1]
        assert record.chunk_id == initial_state.last_chunk_id + 1
        assert record.start_date == date(2008, 5, 2)
        assert record.end_date == date(2008, 5, 9)
        assert record.memory_date == date(2008, 4, 1)
        assert record.n_memory == 30
        assert record.n_new == 2
        assert record.n_discarded == 0
        assert record.n_vocab == len(state.vocabulary)
        assert state.documents.keys() == state.dates.keys()
        assert state.dates["m2"] == date(2008, 5, 9)
        assert state.id == initial_state.id
        assert state.parameters == params
        assert outcome.fallback_memory_date is None

    def test_input_state_unchanged(
        self,
        initial_state: ModelState,
        estimator: StubEstimator,
        params: VocabParams,
    ) -> None:
        before = initial_state.model_dump()
        ChunkStepExecutor(estimator).step(
            initial_state, MAY_TEXTS, MAY_DATES, date(2008, 4, 1), params
        )
        assert initial_state.model_dump() == before

    def test_memory_documents_passed_to_estimator(
        self,
        initial_state: ModelState,
        estimator: StubEstimator,
        params: VocabParams,
    ) -> None:
        ChunkStepExecutor(estimator).step(
            initial_state, MAY_TEXTS, MAY_DATES, date(2008, 4, 25), params
        )

        call = estimator.chunk_calls[-1]
        memory_dates = {initial_state.dates[doc_id] for doc_id in call["memory"]}
        assert min(memory_dates) == date(2008, 4, 25)
        assert len(call["memory"]) == 6
        assert call["new"] == ["m1", "m2"]

    def test_empty_chunk_skipped(
        self,
        initial_state: ModelState,
        params: VocabParams,
    ) -> None:
        estimator = MagicMock()
        outcome = ChunkStepExecutor(estimator).step(
            initial_state, {}, {}, date(2008, 4, 1), params
        )

        assert outcome == Skipped(reason=SkipReason.EMPTY)
        estimator.fit_chunk.assert_not_called()

    def test_no_memory_skipped(
        self,
        initial_state: ModelState,
        params: VocabParams,
    ) -> None:
        estimator = MagicMock()
        outcome = ChunkStepExecutor(estimator).step(
            initial_state, MAY_TEXTS, MAY_DATES, date(2008, 5, 1), params
        )

        assert isinstance(outcome, Skipped)
        assert outcome.reason == SkipReason.NO_MEMORY
        estimator.fit_chunk.assert_not_called()

    def test_memory_fallback(
        self,
        initial_state: ModelState,
        estimator: StubEstimator,
        params: VocabParams,
    ) -> None:
        outcome = ChunkStepExecutor(estimator).step(
            initial_state, MAY_TEXTS, MAY_DATES, date(2008, 5, 1), params, memory_fallback=3
        )

        assert isinstance(outcome, Applied)
        assert outcome.fallback_memory_date == date(2008, 4, 28)
        record = outcome.state.chunk_log[-1]
        assert record.memory_date == date(2008, 4, 28)
        assert record.n_memory == 3

    def test_discarded_memory_documents_are_evicted(
        self,
        initial_state: ModelState,
        estimator: StubEstimator,
    ) -> None:
        # six-token documents never have more than six surviving tokens
        strict = VocabParams(vocab_abs=0, vocab_rel=0.0, vocab_fallback=0, doc_abs=6)
        outcome = ChunkStepExecutor(estimator).step(
            initial_state, MAY_TEXTS, MAY_DATES, date(2008, 4, 1), strict
        )

        assert isinstance(outcome, Applied)
        state = outcome.state
        assert state.chunk_log[-1].n_new == 0
        assert state.chunk_log[-1].n_discarded == 2
        assert state.documents.keys() == state.dates.keys()
        assert max(state.dates.values()) == date(2008, 3, 31)
        assert len(state.documents) == len(initial_state.documents) - 30

    def test_dates_must_follow_model(
        self,
        initial_state: ModelState,
        estimator: StubEstimator,
        params: VocabParams,
    ) -> None:
        with pytest.raises(DateRangeError):
            ChunkStepExecutor(estimator).step(
                initial_state,
                {"x": ["oil"]},
                {"x": date(2008, 4, 30)},
                date(2008, 4, 1),
                params,
            )

    def test_dates_must_not_precede_memory(
        self,
        initial_state: ModelState,
        estimator: StubEstimator,
        params: VocabParams,
    ) -> None:
        with pytest.raises(DateRangeError):
            ChunkStepExecutor(estimator).step(
                initial_state, MAY_TEXTS, MAY_DATES, date(2008, 5, 5), params
            )

    def test_misaligned_dates(
        self,
        initial_state: ModelState,
        estimator: StubEstimator,
        params: VocabParams,
    ) -> None:
        with pytest.raises(ValidationError):
            ChunkStepExecutor(estimator).step(
                initial_state, MAY_TEXTS, {"m1": date(2008, 5, 2)}, date(2008, 4, 1), params
            )

    def test_negative_fallback(
        self,
        initial_state: ModelState,
        estimator: StubEstimator,
        params: VocabParams,
    ) -> None:
        with pytest.raises(ParameterError):
            ChunkStepExecutor(estimator).step(
                initial_state, MAY_TEXTS, MAY_DATES, date(2008, 4, 1), params, memory_fallback=-1
            )

    @pytest.mark.parametrize("fallback", [1.5, "2", None])
    def test_non_integer_fallback(
        self,
        initial_state: ModelState,
        estimator: StubEstimator,
        params: VocabParams,
        fallback: object,
    ) -> None:
        with pytest.raises(ParameterError):
            ChunkStepExecutor(estimator).step(
                initial_state,
                MAY_TEXTS,
                MAY_DATES,
                date(2008, 5, 1),
                params,
                memory_fallback=fallback,
            )
