"""Date coercion helpers for rolling_topics."""

from datetime import date, datetime

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from rolling_topics.errors import ValidationError

__all__ = [
    "as_date",
    "try_as_date",
]

_DATE_ADAPTER = TypeAdapter(date)


def as_date(value: object) -> date:
    """Coerce a date, datetime or ISO string into a ``date``.

    Raises:
        ValidationError: If the value is not a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return _DATE_ADAPTER.validate_python(value)
    except PydanticValidationError as e:
        raise ValidationError(f"not a date: {value!r}") from e


def try_as_date(value: object) -> date | None:
    """Like ``as_date`` but returns None instead of raising."""
    try:
        return as_date(value)
    except ValidationError:
        return None
