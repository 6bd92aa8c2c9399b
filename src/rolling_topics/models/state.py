"""ModelState aggregate for rolling_topics.

A ModelState is the topic model "as of now". It is never changed in place:
every update builds a successor value, so earlier versions stay valid.
"""

from collections.abc import Iterable, Mapping
from datetime import date
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, Field, model_validator

from rolling_topics.models.chunk import ChunkRecord
from rolling_topics.models.params import VocabParams

__all__ = [
    "ModelState",
]


class ModelState(BaseModel, frozen=True):
    """Rolling topic model state.

    Attributes:
        id: Opaque identifier, stable across updates
        model: Estimator state (assignments, counts, K, priors), opaque here
        documents: Document ID -> preprocessed token sequence
        dates: Document ID -> date, same keys as documents
        vocabulary: Active token types, in estimator order
        chunk_log: Per-chunk audit records ordered by chunk_id
        parameters: Thresholds used for the most recent chunk
    """

    id: str
    model: Any
    documents: dict[str, tuple[str, ...]]
    dates: dict[str, date]
    vocabulary: tuple[str, ...]
    chunk_log: tuple[ChunkRecord, ...] = Field(min_length=1)
    parameters: VocabParams

    @model_validator(mode="after")
    def _check_invariants(self) -> "ModelState":
        if self.documents.keys() != self.dates.keys():
            raise ValueError("documents and dates must have identical keys")
        ids = [record.chunk_id for record in self.chunk_log]
        starts = [record.start_date for record in self.chunk_log]
        if any(a >= b for a, b in zip(ids, ids[1:], strict=False)):
            raise ValueError("chunk_log must be strictly ordered by chunk_id")
        if any(a > b for a, b in zip(starts, starts[1:], strict=False)):
            raise ValueError("chunk_log must be ordered by start_date")
        return self

    @property
    def max_date(self) -> date | None:
        """Latest document date, or None for an empty state."""
        return max(self.dates.values()) if self.dates else None

    @property
    def last_chunk_id(self) -> int:
        return self.chunk_log[-1].chunk_id

    # === ACCESSORS ===

    def get_id(self) -> str:
        return self.id

    def get_model(self) -> Any:
        return self.model

    def get_chunks(self) -> tuple[ChunkRecord, ...]:
        return self.chunk_log

    def get_vocab(self) -> tuple[str, ...]:
        return self.vocabulary

    def get_dates(self) -> Mapping[str, date]:
        return MappingProxyType(self.dates)

    def get_parameters(self) -> VocabParams:
        return self.parameters

    def get_docs(
        self,
        names: Iterable[str] | None = None,
        inverse: bool = False,
    ) -> Mapping[str, tuple[str, ...]]:
        """Read-only view over the document store.

        Args:
            names: Restrict to these document IDs (default: all)
            inverse: If True, return every document NOT in names

        Returns:
            Mapping of document ID to token sequence
        """
        if names is None:
            return MappingProxyType(self.documents)
        selected = set(names)
        return MappingProxyType(
            {
                doc_id: tokens
                for doc_id, tokens in self.documents.items()
                if (doc_id in selected) != inverse
            }
        )

    def ids_since(self, cutoff: date) -> list[str]:
        """Document IDs dated on or after ``cutoff``."""
        return [doc_id for doc_id, doc_date in self.dates.items() if doc_date >= cutoff]

    def nth_latest_date(self, position: int) -> date:
        """Date of the ``position``-th most recent document (1-based).

        Positions beyond the history resolve to the oldest date.
        """
        ordered = sorted(self.dates.values(), reverse=True)
        return ordered[min(position, len(ordered)) - 1]

    # === SERIALIZATION ===

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, payload: str | bytes) -> "ModelState":
        return cls.model_validate_json(payload)
