from __future__ import annotations

from datetime import date
from typing import Iterable

from ..attendance.dedupe import find_duplicates
from ..attendance.model import AttendanceRecord
from ..classes.model import ClassOffering
from ..common.datetime_utils import clip_range, iter_days
from ..common.validators import require_valid_range
from ..students.model import Student
from .model import CompletionResult


def expected_record_count(roster: Iterable[Student], start: date, end: date) -> int:
    """Student-days owed in [start, end); days after a student's drop date are not owed."""
    total = 0
    for student in roster:
        total += sum(1 for day in iter_days(start, end) if student.is_enrolled_on(day))
    return total


def completion_rate(
    offering: ClassOffering,
    roster: Iterable[Student],
    records: Iterable[AttendanceRecord],
    start: date,
    end: date,
) -> CompletionResult:
    """Percentage of expected records present for an offering over [start, end).

    The range is clipped to the offering's own dates. Every calendar day is a
    session day. Records are counted as-is, so a duplicated key inflates the
    rate; duplicates are reported in `warnings`.
    """

    require_valid_range(start, end)
    lo, hi = clip_range(start, end, offering.start_date, offering.end_date)

    expected = expected_record_count(roster, lo, hi)
    in_range = [r for r in records if r.crn == offering.crn and lo <= r.date < hi]
    actual = len(in_range)
    rate = (actual / expected * 100) if expected > 0 else 0.0

    return CompletionResult(
        crn=offering.crn,
        start=lo,
        end=hi,
        expected=expected,
        actual=actual,
        rate=rate,
        warnings=find_duplicates(in_range),
    )
