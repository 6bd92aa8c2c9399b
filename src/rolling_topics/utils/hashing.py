"""Hashing utilities for rolling_topics.

Deterministic identifiers for model states.
"""

import hashlib
from collections.abc import Iterable
from datetime import date

__all__ = [
    "generate_model_id",
    "hash_text",
]


def hash_text(text: str) -> str:
    """Generate SHA256 hash of text.

    Args:
        text: Input text to hash

    Returns:
        Hexadecimal SHA256 hash string
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def generate_model_id(doc_ids: Iterable[str], first_date: date, last_date: date) -> str:
    """Generate deterministic model ID.

    The ID is derived from the sorted document IDs of the initial fit and
    its date range, so refitting the same corpus yields the same ID.

    Args:
        doc_ids: Document identifiers of the initial fit
        first_date: Earliest document date
        last_date: Latest document date

    Returns:
        Hexadecimal SHA256 hash string (first 16 characters)
    """
    combined = "|".join(["model", first_date.isoformat(), last_date.isoformat(), *sorted(doc_ids)])
    return hash_text(combined)[:16]
