from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta

import pytest

from attendance_tracker.attendance.model import AttendanceRecord
from attendance_tracker.core.enums import AttendanceStatus, MarkedByRole
from attendance_tracker.core.exceptions import InvalidRangeError
from attendance_tracker.reports.completion import completion_rate, expected_record_count
from attendance_tracker.students.model import Student

START = date(2024, 12, 2)
END = date(2024, 12, 7)


def _roster(active: int, dropped_on: list[date] = ()) -> list[Student]:
    students = [Student(f"s{n}", f"STU{n:03d}", f"Student {n}") for n in range(1, active + 1)]
    for i, d in enumerate(dropped_on, start=active + 1):
        students.append(Student(f"s{i}", f"STU{i:03d}", f"Student {i}", is_dropped=True, dropped_date=d))
    return students


def _records(crn: str, roster: list[Student], days: int, *, skip: int = 0) -> list[AttendanceRecord]:
    out = []
    rid = 1
    for offset in range(days):
        day = START + timedelta(days=offset)
        for s in roster:
            out.append(
                AttendanceRecord(
                    record_id=rid,
                    student_id=s.student_id,
                    class_id="c1",
                    crn=crn,
                    date=day,
                    status=AttendanceStatus.PRESENT,
                    marked_by="t1",
                    marked_by_role=MarkedByRole.INSTRUCTOR,
                    marked_at=datetime.combine(day, datetime.min.time()),
                )
            )
            rid += 1
    return out[: len(out) - skip] if skip else out


def test_ten_active_two_dropped_forty_five_records(math_class):
    roster = _roster(10, [date(2024, 11, 20), date(2024, 11, 25)])
    records = _records(math_class.crn, roster[:10], 5, skip=5)

    result = completion_rate(math_class, roster, records, START, END)

    assert result.expected == 50
    assert result.actual == 45
    assert result.rate == pytest.approx(90.0)


def test_drop_inside_range_counts_days_up_to_drop(math_class):
    roster = _roster(0, [date(2024, 12, 3)])

    assert expected_record_count(roster, START, END) == 2


def test_zero_students_or_zero_length_range_is_zero(math_class):
    empty = completion_rate(math_class, [], [], START, END)
    assert (empty.expected, empty.rate) == (0, 0.0)

    same_day = completion_rate(math_class, _roster(10), [], START, START)
    assert (same_day.expected, same_day.rate) == (0, 0.0)


def test_end_before_start_is_rejected(math_class):
    with pytest.raises(InvalidRangeError):
        completion_rate(math_class, _roster(3), [], END, START)


def test_range_is_clipped_to_offering_dates(math_class):
    offering = replace(math_class, start_date=date(2024, 12, 4))
    roster = _roster(2)

    result = completion_rate(offering, roster, _records(offering.crn, roster, 5), START, END)

    assert result.start == date(2024, 12, 4)
    assert result.expected == 6
    assert result.actual == 6
    assert result.rate == pytest.approx(100.0)


def test_other_crns_are_ignored(math_class):
    roster = _roster(2)
    records = _records(math_class.crn, roster, 5) + _records("99999", roster, 5)

    assert completion_rate(math_class, roster, records, START, END).actual == 10


def test_duplicates_are_counted_but_reported(math_class):
    roster = _roster(1)
    records = _records(math_class.crn, roster, 5)
    records.append(replace(records[0], record_id=99))

    result = completion_rate(math_class, roster, records, START, END)

    assert result.actual == 6
    assert result.rate == pytest.approx(120.0)
    assert len(result.warnings) == 1
