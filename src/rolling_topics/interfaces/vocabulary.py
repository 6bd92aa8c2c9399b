"""Vocabulary builder interface for rolling_topics."""

from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

from rolling_topics.models.params import VocabParams

__all__ = [
    "VocabularyBuilderInterface",
]


@runtime_checkable
class VocabularyBuilderInterface(Protocol):
    """Contract for deciding which tokens stay modeled."""

    def build(
        self,
        documents: Iterable[Sequence[str]],
        params: VocabParams,
        previous: Sequence[str] = (),
    ) -> tuple[str, ...]:
        """Build the vocabulary over the given documents.

        Args:
            documents: Memory and new documents as token sequences
            params: Thresholds to apply
            previous: Vocabulary of the preceding chunk

        Returns:
            Surviving token types
        """
        ...
