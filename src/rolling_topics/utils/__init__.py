"""Utility functions for rolling_topics.

This module contains internal utility functions.
"""

from rolling_topics.utils.dates import as_date, try_as_date
from rolling_topics.utils.hashing import generate_model_id, hash_text
from rolling_topics.utils.periods import (
    Period,
    date_sequence,
    is_period,
    parse_period,
    shift_date,
)

__all__ = [
    "Period",
    "as_date",
    "date_sequence",
    "generate_model_id",
    "hash_text",
    "is_period",
    "parse_period",
    "shift_date",
    "try_as_date",
]
