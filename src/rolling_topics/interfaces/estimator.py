"""Estimator interface for rolling_topics.

This module defines the Protocol for the statistical estimator that fits
one chunk of a rolling topic model. The update controller only decides
which documents are fed to it; sampling and inference live behind it.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from rolling_topics.models.fit import ChunkFit, InitialFit
from rolling_topics.models.params import VocabParams

__all__ = [
    "ChunkEstimatorInterface",
]


@runtime_checkable
class ChunkEstimatorInterface(Protocol):
    """Contract for rolling topic estimators.

    Implementations must admit documents deterministically: a document is
    admitted iff, after vocabulary filtering, more than ``doc_abs`` of its
    tokens survive.
    """

    def fit_initial(
        self,
        texts: Mapping[str, Sequence[str]],
        params: VocabParams,
    ) -> InitialFit:
        """Fit a model from scratch.

        Args:
            texts: Document ID -> token sequence
            params: Vocabulary and document thresholds

        Returns:
            InitialFit with model, admitted documents and vocabulary
        """
        ...

    def fit_chunk(
        self,
        model: Any,
        memory_docs: Mapping[str, Sequence[str]],
        new_texts: Mapping[str, Sequence[str]],
        vocabulary: Sequence[str],
        params: VocabParams,
    ) -> ChunkFit:
        """Fit one chunk, initialised from the memory documents.

        Args:
            model: Current estimator state
            memory_docs: Preprocessed memory documents
            new_texts: Raw (tokenized) new texts
            vocabulary: Current vocabulary
            params: Vocabulary and document thresholds

        Returns:
            ChunkFit with updated model, surviving documents and new vocabulary
        """
        ...

    def compute_topics(
        self,
        model: Any,
        documents: Mapping[str, Sequence[str]],
        vocabulary: Sequence[str],
    ) -> Any:
        """Recompute the topic matrix from the model's token-topic assignments.

        Args:
            model: Estimator state holding assignments and K
            documents: All modeled documents
            vocabulary: Active vocabulary

        Returns:
            Estimator state with the recomputed topic matrix attached
        """
        ...
