from __future__ import annotations

from datetime import date, datetime, timedelta

from attendance_tracker.attendance.model import AttendanceRecord
from attendance_tracker.attendance.streaks import consecutive_absences
from attendance_tracker.core.enums import AttendanceStatus, MarkedByRole

A = AttendanceStatus.ABSENT
P = AttendanceStatus.PRESENT


def _rec(record_id: int, day: date, status: AttendanceStatus, *, marked_hour: int = 8) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=record_id,
        student_id="S",
        class_id="C",
        crn="10001",
        date=day,
        status=status,
        marked_by="t1",
        marked_by_role=MarkedByRole.INSTRUCTOR,
        marked_at=datetime.combine(day, datetime.min.time()) + timedelta(hours=marked_hour),
    )


def test_three_trailing_absences_after_present():
    records = [
        _rec(1, date(2024, 12, 5), A),
        _rec(2, date(2024, 12, 4), A),
        _rec(3, date(2024, 12, 3), A),
        _rec(4, date(2024, 12, 2), P),
    ]

    streak = consecutive_absences(records, date(2024, 12, 5))

    assert streak.count == 3
    assert streak.dates == [date(2024, 12, 3), date(2024, 12, 4), date(2024, 12, 5)]


def test_no_records_means_no_streak():
    streak = consecutive_absences([], date(2024, 12, 5))

    assert streak.count == 0
    assert streak.dates == []


def test_latest_record_not_absent_gives_zero():
    for status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.EXCUSED):
        records = [_rec(1, date(2024, 12, 3), A), _rec(2, date(2024, 12, 4), A), _rec(3, date(2024, 12, 5), status)]
        assert consecutive_absences(records, date(2024, 12, 5)).count == 0


def test_all_absent_counts_full_history():
    records = [_rec(i, date(2024, 11, 1) + timedelta(days=i), A) for i in range(12)]

    streak = consecutive_absences(records, date(2024, 12, 31))

    assert streak.count == 12
    assert streak.dates[0] == date(2024, 11, 1)


def test_missing_days_do_not_break_or_extend_the_streak():
    records = [_rec(1, date(2024, 12, 1), P), _rec(2, date(2024, 12, 2), A), _rec(3, date(2024, 12, 5), A)]

    streak = consecutive_absences(records, date(2024, 12, 6))

    assert streak.count == 2
    assert streak.dates == [date(2024, 12, 2), date(2024, 12, 5)]


def test_records_after_as_of_are_ignored():
    records = [_rec(1, date(2024, 12, 4), A), _rec(2, date(2024, 12, 5), P), _rec(3, date(2024, 12, 6), A)]

    assert consecutive_absences(records, date(2024, 12, 4)).dates == [date(2024, 12, 4)]
    assert consecutive_absences(records, date(2024, 12, 5)).count == 0


def test_input_order_does_not_matter():
    records = [_rec(1, date(2024, 12, 3), A), _rec(2, date(2024, 12, 1), P), _rec(3, date(2024, 12, 2), A)]

    assert consecutive_absences(list(reversed(records)), date(2024, 12, 3)).count == 2
    assert consecutive_absences(records, date(2024, 12, 3)).count == 2


def test_streak_dates_are_a_contiguous_suffix_of_history():
    statuses = [A, P, A, A, AttendanceStatus.LATE, A, A, A, P, A]
    records = [_rec(i, date(2024, 12, 1) + timedelta(days=i), s) for i, s in enumerate(statuses)]

    for offset in range(len(statuses)):
        as_of = date(2024, 12, 1) + timedelta(days=offset)
        streak = consecutive_absences(records, as_of)
        history = sorted((r for r in records if r.date <= as_of), key=lambda r: r.date)
        suffix = history[len(history) - streak.count:] if streak.count else []

        assert [r.date for r in suffix] == streak.dates
        assert all(r.status == A for r in suffix)
        if streak.count < len(history):
            assert history[len(history) - streak.count - 1].status != A


def test_duplicate_day_uses_most_recent_mark_and_warns():
    day = date(2024, 12, 5)
    records = [
        _rec(1, date(2024, 12, 4), A),
        _rec(2, day, A, marked_hour=8),
        _rec(3, day, P, marked_hour=10),
    ]

    streak = consecutive_absences(records, day)

    assert streak.count == 0
    assert len(streak.warnings) == 1
    assert streak.warnings[0].kept_record_id == 3
    assert streak.warnings[0].discarded_record_ids == (2,)
