"""Chunk and memory window resolution for rolling_topics.

This module turns the user-facing chunk/memory arguments (explicit
dates, period strings, lookback counts) into concrete sorted dates.
"""

from bisect import bisect_left
from collections.abc import Collection, Sequence
from datetime import date

from rolling_topics.errors import (
    ChunkSpecError,
    DateRangeError,
    MemoryRangeError,
    OrderError,
    ValidationError,
)
from rolling_topics.logging import get_logger
from rolling_topics.models.windows import ResolvedWindows
from rolling_topics.utils.dates import as_date, try_as_date
from rolling_topics.utils.periods import date_sequence, is_period, parse_period, shift_date

__all__ = [
    "ChunkSpec",
    "DateWindowResolver",
    "MemorySpec",
]

logger = get_logger(__name__)

ChunkSpec = str | date | Sequence[str | date] | None
MemorySpec = str | int | date | Sequence[str | date] | None


def _is_sorted(values: Sequence[date]) -> bool:
    return all(a <= b for a, b in zip(values, values[1:], strict=False))


class DateWindowResolver:
    """Resolve chunk boundaries and memory cutoffs.

    Chunk arguments:
        - None: one chunk starting at the earliest new date
        - explicit dates: used as chunk starts
        - period string ("month", "2 weeks"): chunk starts stepped from the
          earliest to the latest new date inclusive

    Memory arguments:
        - explicit dates: one cutoff per chunk
        - period string: one period back from each chunk start
        - integer N: date of the N-th most recent document (prior history and
          new documents combined) strictly before each chunk start

    Example:
        resolver = DateWindowResolver()
        windows = resolver.resolve(state.dates.values(), new_dates, "month", "month")
        for memory, start, end in windows.intervals():
            ...
    """

    def resolve(
        self,
        existing_dates: Collection[date],
        new_dates: Collection[date],
        chunks: ChunkSpec = None,
        memory: MemorySpec = None,
    ) -> ResolvedWindows:
        """Resolve chunk and memory arguments into concrete dates.

        Args:
            existing_dates: Dates of all documents already modeled
            new_dates: Dates of the incoming documents
            chunks: Chunk boundaries
            memory: Memory cutoffs

        Returns:
            ResolvedWindows with equally long, sorted chunks and memory

        Raises:
            DateRangeError: New dates are not strictly after existing dates
            ChunkSpecError: Chunk boundaries are out of range or unparsable
            MemoryRangeError: A memory date is after its chunk or unresolvable
            OrderError: Chunks or memory are not sorted
        """
        if not new_dates:
            raise ValidationError("no new dates to resolve windows for")
        first, last = min(new_dates), max(new_dates)
        existing_max = max(existing_dates) if existing_dates else None
        if existing_max is not None and first <= existing_max:
            raise DateRangeError(
                f"new dates must be after {existing_max}, earliest new date is {first}"
            )

        chunk_dates = self._resolve_chunks(chunks, first, last)
        if existing_max is not None and min(chunk_dates) <= existing_max:
            raise ChunkSpecError(f"all chunk dates must be after {existing_max}")
        if first < min(chunk_dates):
            raise ChunkSpecError(
                f"earliest new date {first} lies before the first chunk {min(chunk_dates)}"
            )

        memory_dates = self._resolve_memory(memory, chunk_dates, existing_dates, new_dates)
        if len(memory_dates) != len(chunk_dates):
            raise ValidationError(
                f"memory has {len(memory_dates)} dates but there are {len(chunk_dates)} chunks"
            )
        offending = [
            f"{m} > {c}" for m, c in zip(memory_dates, chunk_dates, strict=True) if m > c
        ]
        if offending:
            raise MemoryRangeError(
                "all memory dates must not be greater than their chunk date, but "
                + ", ".join(offending)
            )
        if not _is_sorted(chunk_dates):
            raise OrderError("chunks must be sorted")
        if not _is_sorted(memory_dates):
            raise OrderError("memory must be sorted")

        windows = ResolvedWindows(
            chunks=tuple(chunk_dates),
            memory=tuple(memory_dates),
            last_date=last,
        )
        logger.debug(
            "windows_resolved",
            chunks=len(windows),
            first_chunk=str(chunk_dates[0]),
            first_memory=str(memory_dates[0]),
        )
        return windows

    def _resolve_chunks(self, chunks: ChunkSpec, first: date, last: date) -> list[date]:
        if chunks is None:
            return [first]
        if isinstance(chunks, date):
            return [as_date(chunks)]
        if isinstance(chunks, str):
            parsed = try_as_date(chunks)
            if parsed is not None:
                return [parsed]
            if is_period(chunks):
                try:
                    period = parse_period(chunks)
                except ValueError as e:
                    raise ChunkSpecError(str(e)) from e
                return date_sequence(first, last, period)
            raise ChunkSpecError(f"chunks is neither a date nor a period: {chunks!r}")
        try:
            resolved = [as_date(value) for value in chunks]
        except (TypeError, ValidationError) as e:
            raise ChunkSpecError(f"invalid chunk dates: {e}") from e
        if not resolved:
            raise ChunkSpecError("chunks must not be empty")
        return resolved

    def _resolve_memory(
        self,
        memory: MemorySpec,
        chunk_dates: list[date],
        existing_dates: Collection[date],
        new_dates: Collection[date],
    ) -> list[date]:
        if memory is None:
            raise ValidationError("memory must be given as dates, a period or a count")
        if isinstance(memory, bool):
            raise ValidationError("memory must not be a boolean")
        if isinstance(memory, str) and memory.strip().isdigit():
            memory = int(memory)
        if isinstance(memory, int):
            return self._memory_by_count(memory, chunk_dates, existing_dates, new_dates)
        if isinstance(memory, date):
            return [as_date(memory)]
        if isinstance(memory, str):
            parsed = try_as_date(memory)
            if parsed is not None:
                return [parsed]
            if is_period(memory):
                try:
                    period = parse_period(memory)
                except ValueError as e:
                    raise ValidationError(str(e)) from e
                return [shift_date(chunk, period, -1) for chunk in chunk_dates]
            raise ValidationError(f"memory is neither a date, a period nor a count: {memory!r}")
        try:
            return [as_date(value) for value in memory]
        except TypeError as e:
            raise ValidationError(f"invalid memory dates: {e}") from e

    def _memory_by_count(
        self,
        count: int,
        chunk_dates: list[date],
        existing_dates: Collection[date],
        new_dates: Collection[date],
    ) -> list[date]:
        if count < 0:
            raise MemoryRangeError(f"memory count must be non-negative, got {count}")
        if count == 0:
            return list(chunk_dates)
        history = sorted([*existing_dates, *new_dates])
        resolved = []
        for chunk in chunk_dates:
            earlier = bisect_left(history, chunk)
            if earlier < count:
                raise MemoryRangeError(
                    f"only {earlier} documents precede chunk {chunk}, memory needs {count}"
                )
            resolved.append(history[earlier - count])
        return resolved
