from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier. Only the HTTP edge calls
    this; services always receive the reference date as an argument.
    """
    return datetime.now()


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each calendar day in [start, end)."""
    day = start
    while day < end:
        yield day
        day += timedelta(days=1)


def clip_range(start: date, end: date, lower: date, upper: date) -> tuple[date, date]:
    """Intersect [start, end) with [lower, upper); an empty result has start == end."""
    clipped_start = max(start, lower)
    clipped_end = min(end, upper)
    if clipped_end < clipped_start:
        clipped_end = clipped_start
    return clipped_start, clipped_end
