"""Deterministic stub estimator for testing."""

import hashlib
from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np

from rolling_topics.models.fit import ChunkFit, InitialFit
from rolling_topics.models.params import VocabParams
from rolling_topics.services.vocabulary import ThresholdVocabularyBuilder


class StubEstimator:
    """Stub estimator applying the real threshold rules.

    Token-topic assignments are a hash of the token, so every fit is
    deterministic. The model is a plain JSON-serializable dict.
    """

    def __init__(self, k: int = 3) -> None:
        self._k = k
        self._builder = ThresholdVocabularyBuilder()
        self.chunk_calls: list[dict[str, Any]] = []
        self.topic_calls = 0

    def _topic(self, token: str) -> int:
        return int(hashlib.sha256(token.encode()).hexdigest()[:8], 16) % self._k

    def _model(self, documents: Mapping[str, Sequence[str]], fits: int) -> dict[str, Any]:
        return {
            "k": self._k,
            "fits": fits,
            "assignments": {
                doc_id: [self._topic(token) for token in tokens]
                for doc_id, tokens in documents.items()
            },
            "topics": None,
        }

    def fit_initial(
        self,
        texts: Mapping[str, Sequence[str]],
        params: VocabParams,
    ) -> InitialFit:
        vocabulary = self._builder.build(texts.values(), params)
        filtered = self._builder.filter_documents(texts, vocabulary, params.doc_abs)
        return InitialFit(
            model=self._model(filtered.admitted, fits=1),
            documents=filtered.admitted,
            n_discarded=len(filtered.discarded),
            vocabulary=vocabulary,
        )

    def fit_chunk(
        self,
        model: Any,
        memory_docs: Mapping[str, Sequence[str]],
        new_texts: Mapping[str, Sequence[str]],
        vocabulary: Sequence[str],
        params: VocabParams,
    ) -> ChunkFit:
        self.chunk_calls.append(
            {"memory": sorted(memory_docs), "new": sorted(new_texts), "params": params}
        )
        combined = [*memory_docs.values(), *new_texts.values()]
        new_vocabulary = self._builder.build(combined, params, previous=vocabulary)
        memory = self._builder.filter_documents(memory_docs, new_vocabulary, params.doc_abs)
        new = self._builder.filter_documents(new_texts, new_vocabulary, params.doc_abs)
        documents = {**memory.admitted, **new.admitted}
        return ChunkFit(
            model=self._model(documents, fits=model["fits"] + 1),
            documents=documents,
            n_new=len(new.admitted),
            n_discarded=len(new.discarded),
            vocabulary=new_vocabulary,
        )

    def compute_topics(
        self,
        model: Any,
        documents: Mapping[str, Sequence[str]],
        vocabulary: Sequence[str],
    ) -> Any:
        self.topic_calls += 1
        index = {token: i for i, token in enumerate(vocabulary)}
        matrix = np.zeros((self._k, len(vocabulary)), dtype=int)
        for doc_id, tokens in documents.items():
            for token in tokens:
                # stored documents outside the last memory window may hold dropped tokens
                if token in index:
                    matrix[self._topic(token), index[token]] += 1
        return {**model, "topics": matrix.tolist()}


class FailingEstimator(StubEstimator):
    """Stub estimator raising on the n-th chunk fit."""

    def __init__(self, fail_on: int, k: int = 3) -> None:
        super().__init__(k=k)
        self._fail_on = fail_on

    def fit_chunk(self, model: Any, *args: Any, **kwargs: Any) -> ChunkFit:
        if len(self.chunk_calls) + 1 == self._fail_on:
            self.chunk_calls.append({})
            raise RuntimeError("sampler diverged")
        return super().fit_chunk(model, *args, **kwargs)
