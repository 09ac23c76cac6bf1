from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Iterable, Mapping, Sequence

from ..attendance.model import AttendanceRecord
from ..classes.model import ClassOffering
from ..students.model import Student
from .model import MissingAttendance


def missing_attendance(
    offerings: Iterable[ClassOffering],
    rosters: Mapping[str, Sequence[Student]],
    records: Iterable[AttendanceRecord],
    day: date,
) -> list[MissingAttendance]:
    """Offerings running on `day` whose record count is below the number of enrolled students.

    Nothing submitted and a partial submission are both reported; compare
    `recorded` with `expected` to tell them apart.
    """

    counts = Counter(r.class_id for r in records if r.date == day)

    out: list[MissingAttendance] = []
    for offering in offerings:
        if not offering.covers(day):
            continue
        expected = sum(1 for s in rosters.get(offering.class_id, ()) if s.is_enrolled_on(day))
        recorded = counts.get(offering.class_id, 0)
        if recorded < expected:
            out.append(MissingAttendance(offering=offering, date=day, recorded=recorded, expected=expected))
    return out
