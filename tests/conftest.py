"""Shared test fixtures for rolling_topics.

This module provides pytest fixtures used across all tests.
"""

from collections.abc import Callable
from datetime import date, timedelta

import pytest
from mocks.mock_estimator import StubEstimator

from rolling_topics.config import RollingTopicsConfig
from rolling_topics.controller import RollingUpdateController
from rolling_topics.models.params import VocabParams
from rolling_topics.models.state import ModelState

WORDS = [
    "market", "bank", "rate", "growth", "oil", "trade", "stock", "bond",
    "inflation", "budget", "export", "crisis", "loan", "price", "job",
]


def make_texts(
    start: date,
    end: date,
    prefix: str,
    tokens_per_doc: int = 6,
) -> tuple[dict[str, list[str]], dict[str, date]]:
    """One document per day from start to end inclusive."""
    texts: dict[str, list[str]] = {}
    dates: dict[str, date] = {}
    day = start
    i = 0
    while day <= end:
        doc_id = f"{prefix}{i:03d}"
        texts[doc_id] = [WORDS[(i * 7 + j * 3) % len(WORDS)] for j in range(tokens_per_doc)]
        dates[doc_id] = day
        day += timedelta(days=1)
        i += 1
    return texts, dates


@pytest.fixture
def texts_factory() -> Callable[..., tuple[dict[str, list[str]], dict[str, date]]]:
    return make_texts


@pytest.fixture
def params() -> VocabParams:
    """Thresholds keeping every token and every non-empty document."""
    return VocabParams(vocab_abs=0, vocab_rel=0.0, vocab_fallback=0, doc_abs=0)


@pytest.fixture
def config() -> RollingTopicsConfig:
    return RollingTopicsConfig(memory_fallback=0, compute_topics=True, default_memory=None)


@pytest.fixture
def estimator() -> StubEstimator:
    return StubEstimator(k=3)


@pytest.fixture
def controller(estimator: StubEstimator, config: RollingTopicsConfig) -> RollingUpdateController:
    return RollingUpdateController(estimator, config=config)


@pytest.fixture
def initial_state(controller: RollingUpdateController, params: VocabParams) -> ModelState:
    """Model fitted on one document per day, 2008-01-01 to 2008-04-30."""
    texts, dates = make_texts(date(2008, 1, 1), date(2008, 4, 30), prefix="a")
    return controller.create(texts, dates, params, model_id="economy").state


@pytest.fixture
def may_june_texts() -> tuple[dict[str, list[str]], dict[str, date]]:
    """60 documents: 2008-05-01..2008-05-30 and 2008-06-01..2008-06-30."""
    may_texts, may_dates = make_texts(date(2008, 5, 1), date(2008, 5, 30), prefix="m")
    june_texts, june_dates = make_texts(date(2008, 6, 1), date(2008, 6, 30), prefix="j")
    return {**may_texts, **june_texts}, {**may_dates, **june_dates}
