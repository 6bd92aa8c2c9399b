"""Calendar period helpers for rolling_topics.

Periods are written the way users type them: ``"month"``, ``"2 weeks"``,
``"Quarter"``. Month-based steps clamp to the last day of the target month
(2008-03-31 minus one month is 2008-02-29).
"""

import calendar
import re
from dataclasses import dataclass
from datetime import date, timedelta

__all__ = [
    "Period",
    "date_sequence",
    "is_period",
    "parse_period",
    "shift_date",
]

_PERIOD_RE = re.compile(r"^\s*(?:(\d+)\s+)?(day|week|month|quarter|year)s?\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class Period:
    """A calendar step such as ``3 months``."""

    count: int
    unit: str

    def __str__(self) -> str:
        return f"{self.count} {self.unit}"


def is_period(value: str) -> bool:
    return _PERIOD_RE.match(value) is not None


def parse_period(value: str) -> Period:
    """Parse a period string.

    Args:
        value: Period such as "month" or "2 weeks"

    Returns:
        Parsed Period

    Raises:
        ValueError: If the string is not a period
    """
    match = _PERIOD_RE.match(value)
    if match is None:
        raise ValueError(f"not a period: {value!r}")
    count = int(match.group(1)) if match.group(1) else 1
    if count < 1:
        raise ValueError(f"period count must be positive: {value!r}")
    return Period(count=count, unit=match.group(2).lower())


def _add_months(start: date, months: int) -> date:
    index = start.year * 12 + (start.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def shift_date(start: date, period: Period, steps: int = 1) -> date:
    """Move ``start`` by ``steps`` periods (negative steps go back in time)."""
    if period.unit == "day":
        return start + timedelta(days=period.count * steps)
    if period.unit == "week":
        return start + timedelta(weeks=period.count * steps)
    if period.unit == "month":
        return _add_months(start, period.count * steps)
    if period.unit == "quarter":
        return _add_months(start, 3 * period.count * steps)
    return _add_months(start, 12 * period.count * steps)


def date_sequence(start: date, end: date, period: Period) -> list[date]:
    """Dates from ``start`` to ``end`` inclusive, stepping by ``period``.

    Every element is computed from ``start`` directly so month clamping
    does not accumulate (Jan 31, Feb 29, Mar 31, ...).
    """
    dates: list[date] = []
    steps = 0
    current = start
    while current <= end:
        dates.append(current)
        steps += 1
        current = shift_date(start, period, steps)
    return dates
