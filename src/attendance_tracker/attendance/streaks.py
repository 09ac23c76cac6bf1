from __future__ import annotations

from datetime import date
from typing import Iterable

from ..core.enums import AttendanceStatus
from .dedupe import resolve_duplicates
from .model import AbsenceStreak, AttendanceRecord


def consecutive_absences(records: Iterable[AttendanceRecord], as_of: date) -> AbsenceStreak:
    """Trailing run of explicit "absent" records ending on or before as_of.

    `records` must belong to a single (student, class) pair. Days with no
    record are skipped rather than counted or treated as a break; only a
    present/late/excused record ends the run. Dates are returned ascending.
    """

    history, warnings = resolve_duplicates(r for r in records if r.date <= as_of)
    history.sort(key=lambda r: r.date, reverse=True)

    dates: list[date] = []
    for r in history:
        if r.status != AttendanceStatus.ABSENT:
            break
        dates.append(r.date)

    dates.reverse()
    return AbsenceStreak(count=len(dates), dates=dates, warnings=warnings)
