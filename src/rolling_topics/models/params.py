"""Threshold parameter model for rolling_topics."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from rolling_topics.errors import ParameterError

__all__ = [
    "VocabParams",
]


class VocabParams(BaseModel, frozen=True):
    """Frequency and size thresholds used to (re)build the vocabulary.

    A token is kept if its count exceeds ``vocab_fallback``, or if its count
    exceeds ``vocab_abs`` and its relative frequency exceeds ``vocab_rel``.
    A document is kept if more than ``doc_abs`` of its tokens survive.

    Attributes:
        vocab_abs: Absolute lower bound on token counts
        vocab_rel: Relative lower bound on token frequency, in [0, 1]
        vocab_fallback: Count above which a token is always kept
        doc_abs: Lower bound on surviving tokens per document
    """

    vocab_abs: int = Field(ge=0)
    vocab_rel: float = Field(ge=0.0, le=1.0)
    vocab_fallback: int = Field(ge=0)
    doc_abs: int = Field(ge=0)

    @classmethod
    def build(cls, **values: Any) -> "VocabParams":
        """Validate threshold values, raising ParameterError on bad input."""
        try:
            return cls(**values)
        except PydanticValidationError as e:
            raise ParameterError(f"invalid threshold parameters: {e}") from e

    def merged(self, overrides: "Mapping[str, Any] | VocabParams | None") -> "VocabParams":
        """Return parameters with ``overrides`` applied on top of these.

        Unspecified entries inherit the values stored here.
        """
        if overrides is None:
            return self
        if isinstance(overrides, VocabParams):
            return overrides
        unknown = set(overrides) - set(type(self).model_fields)
        if unknown:
            raise ParameterError(f"unknown parameters: {', '.join(sorted(unknown))}")
        return VocabParams.build(**{**self.model_dump(), **overrides})
