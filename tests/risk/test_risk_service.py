from __future__ import annotations

from datetime import date

import pytest

from attendance_tracker.attendance.model import AttendanceMark
from attendance_tracker.core.enums import AttendanceStatus, RiskLevel
from attendance_tracker.core.exceptions import AuthorizationError, ValidationError

ABSENT_DAYS = {
    ("c1", "s1"): [2, 3, 4, 5, 6],
    ("c1", "s2"): [4, 5, 6],
    ("c2", "s21"): [3, 4, 5, 6],
}


@pytest.fixture
def seeded(container, fixed_now):
    svc = container.attendance_service
    for (class_id, student_id), days in ABSENT_DAYS.items():
        teacher = "t1" if class_id == "c1" else "t2"
        svc.submit_roster(
            user_id=teacher,
            class_id=class_id,
            day=date(2024, 12, 1),
            marks=[AttendanceMark(student_id, AttendanceStatus.PRESENT)],
            now=fixed_now,
        )
        for d in days:
            svc.submit_roster(
                user_id=teacher,
                class_id=class_id,
                day=date(2024, 12, d),
                marks=[AttendanceMark(student_id, AttendanceStatus.ABSENT)],
                now=fixed_now,
            )
    return container


def test_admin_sees_all_sorted_by_streak(seeded, users):
    report = seeded.risk_service.at_risk_students(users["admin"], date(2024, 12, 6))

    assert [(r.student_id, r.count) for r in report.rows] == [("s1", 5), ("s21", 4), ("s2", 3)]
    assert report.rows[0].level == RiskLevel.CRITICAL
    assert report.rows[0].student_number == "STU001"
    assert report.rows[0].crn == "20001"
    assert report.critical_count == 1


def test_departmental_user_only_sees_own_department(seeded, users):
    report = seeded.risk_service.at_risk_students(users["dept"], date(2024, 12, 6))

    assert {r.class_id for r in report.rows} == {"c1"}


def test_threshold_override(seeded, users):
    report = seeded.risk_service.at_risk_students(users["admin"], date(2024, 12, 6), threshold=5)

    assert [r.student_id for r in report.rows] == ["s1"]


def test_invalid_threshold(seeded, users):
    with pytest.raises(ValidationError):
        seeded.risk_service.at_risk_students(users["admin"], date(2024, 12, 6), threshold=0)


def test_count_by_class(seeded, users):
    assert seeded.risk_service.at_risk_count_by_class(users["teacher"], "c1", date(2024, 12, 6)) == 2

    with pytest.raises(AuthorizationError):
        seeded.risk_service.at_risk_count_by_class(users["teacher"], "c2", date(2024, 12, 6))
