"""Vocabulary threshold rule for rolling_topics.

Estimator implementations use this service to rebuild the vocabulary
and to decide which documents are admitted for a chunk.
"""

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence

from rolling_topics.logging import get_logger
from rolling_topics.models.params import VocabParams

__all__ = [
    "DocumentFilterResult",
    "ThresholdVocabularyBuilder",
]

logger = get_logger(__name__)


class DocumentFilterResult:
    """Documents split into admitted (filtered) and discarded IDs."""

    def __init__(
        self,
        admitted: dict[str, tuple[str, ...]],
        discarded: list[str],
    ) -> None:
        self.admitted = admitted
        self.discarded = discarded


class ThresholdVocabularyBuilder:
    """Absolute/relative/fallback frequency vocabulary rule.

    A token is retained iff ``count > vocab_fallback`` or
    (``count > vocab_abs`` and ``count / total > vocab_rel``), counted over
    all documents passed in (memory and new documents of a chunk).

    Tokens that were already in the previous vocabulary keep their relative
    order; newly retained tokens are appended in sorted order.
    """

    def build(
        self,
        documents: Iterable[Sequence[str]],
        params: VocabParams,
        previous: Sequence[str] = (),
    ) -> tuple[str, ...]:
        """Build the vocabulary over the given documents.

        Args:
            documents: Token sequences to count over
            params: Thresholds to apply
            previous: Vocabulary of the preceding chunk (for ordering)

        Returns:
            Surviving token types
        """
        counts: Counter[str] = Counter()
        for tokens in documents:
            counts.update(tokens)
        total = sum(counts.values())
        if total == 0:
            return ()

        kept = {
            token
            for token, count in counts.items()
            if count > params.vocab_fallback
            or (count > params.vocab_abs and count / total > params.vocab_rel)
        }
        ordered = [token for token in previous if token in kept]
        seen = set(ordered)
        ordered.extend(sorted(kept - seen))

        logger.debug("vocabulary_built", tokens=len(counts), kept=len(ordered))
        return tuple(ordered)

    def filter_documents(
        self,
        texts: Mapping[str, Sequence[str]],
        vocabulary: Iterable[str],
        doc_abs: int,
    ) -> DocumentFilterResult:
        """Restrict texts to the vocabulary and drop short documents.

        A document is admitted iff more than ``doc_abs`` tokens survive.
        """
        vocab = set(vocabulary)
        admitted: dict[str, tuple[str, ...]] = {}
        discarded: list[str] = []
        for doc_id, tokens in texts.items():
            kept = tuple(token for token in tokens if token in vocab)
            if len(kept) > doc_abs:
                admitted[doc_id] = kept
            else:
                discarded.append(doc_id)
        return DocumentFilterResult(admitted=admitted, discarded=discarded)
