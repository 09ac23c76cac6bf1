from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from attendance_tracker.attendance.model import AttendanceMark
from attendance_tracker.core.enums import AttendanceStatus
from attendance_tracker.core.exceptions import AuthorizationError, InvalidRangeError, NotFoundError


def _mark_all(container, class_id: str, teacher: str, day: date, students: list[str], status=AttendanceStatus.PRESENT):
    container.attendance_service.submit_roster(
        user_id=teacher,
        class_id=class_id,
        day=day,
        marks=[AttendanceMark(s, status) for s in students],
        now=datetime.combine(day, datetime.min.time()),
    )


C1_STUDENTS = [f"s{n}" for n in range(1, 11)]


def test_completion_rate_scenario(container):
    for offset in range(5):
        day = date(2024, 12, 2) + timedelta(days=offset)
        students = C1_STUDENTS if offset < 4 else C1_STUDENTS[:5]
        _mark_all(container, "c1", "t1", day, students)

    result = container.report_service.completion_rate("20001", date(2024, 12, 2), date(2024, 12, 7))

    assert (result.expected, result.actual) == (50, 45)
    assert result.rate == pytest.approx(90.0)


def test_completion_rate_errors(container):
    with pytest.raises(NotFoundError):
        container.report_service.completion_rate("00000", date(2024, 12, 2), date(2024, 12, 7))
    with pytest.raises(InvalidRangeError):
        container.report_service.completion_rate("20001", date(2024, 12, 7), date(2024, 12, 2))


def test_missing_attendance_with_term_filter(container):
    day = date(2024, 12, 5)
    _mark_all(container, "c1", "t1", day, C1_STUDENTS[:8])
    _mark_all(container, "c2", "t2", day, ["s21", "s22", "s23"])

    missing = container.report_service.missing_attendance(day)
    assert [(m.offering.class_id, m.recorded, m.expected) for m in missing] == [("c1", 8, 10)]
    assert container.report_service.missing_attendance(day, term_code="S25") == []


def test_crn_breakdown(container, users):
    day = date(2024, 12, 2)
    _mark_all(container, "c1", "t1", day, C1_STUDENTS[:6])
    _mark_all(container, "c1", "t1", day, C1_STUDENTS[6:8], AttendanceStatus.LATE)
    _mark_all(container, "c1", "t1", day, C1_STUDENTS[8:], AttendanceStatus.ABSENT)

    rows = container.report_service.crn_breakdown(users["dept"], start=day, end=day + timedelta(days=1))

    assert len(rows) == 1
    row = rows[0]
    assert row.crn == "20001"
    assert (row.present, row.late, row.absent, row.excused, row.total_records) == (6, 2, 2, 0, 10)
    assert row.attendance_rate == 80
    assert row.completion == 100


def test_department_summary(container, users):
    today = date(2024, 12, 2)
    _mark_all(container, "c1", "t1", today, C1_STUDENTS)

    summary = container.report_service.department_summary(users["admin"], today)

    assert summary.total_crns == 2
    assert summary.total_credit_hours == 7
    assert summary.total_enrollment == 13
    # c1: 10 of 20 student-days since Dec 1; c2: none
    assert summary.avg_completion == 25
    assert summary.missing_today == 1
    assert summary.missing_yesterday == 2


def test_department_summary_instructor_filter(container, users):
    summary = container.report_service.department_summary(users["admin"], date(2024, 12, 2), instructor_id="t2")

    assert summary.total_crns == 1
    assert summary.total_credit_hours == 4


def test_audit_logs_are_admin_only(container, users):
    _mark_all(container, "c1", "t1", date(2024, 12, 2), ["s1"])

    assert len(container.report_service.audit_logs(users["admin"], limit=5)) == 1
    with pytest.raises(AuthorizationError):
        container.report_service.audit_logs(users["teacher"])


def test_terms_are_listed_by_start_date(container):
    assert [t.code for t in container.report_service.terms()] == ["F24", "S25"]
