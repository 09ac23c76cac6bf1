from __future__ import annotations

from datetime import date, datetime, timedelta

from attendance_tracker.attendance.model import AttendanceRecord
from attendance_tracker.core.enums import AttendanceStatus, MarkedByRole, RiskLevel
from attendance_tracker.database.demo_data import DEMO_REFERENCE_DATE, build_demo_records
from attendance_tracker.risk.aggregator import find_at_risk

START = date(2024, 12, 1)


def _history(student_id: str, class_id: str, statuses: str, first_id: int) -> list[AttendanceRecord]:
    """statuses: one letter per day from START (A=absent, P=present, L=late)."""
    mapping = {"A": AttendanceStatus.ABSENT, "P": AttendanceStatus.PRESENT, "L": AttendanceStatus.LATE}
    out = []
    for i, ch in enumerate(statuses):
        day = START + timedelta(days=i)
        out.append(
            AttendanceRecord(
                record_id=first_id + i,
                student_id=student_id,
                class_id=class_id,
                crn=f"crn-{class_id}",
                date=day,
                status=mapping[ch],
                marked_by="t1",
                marked_by_role=MarkedByRole.INSTRUCTOR,
                marked_at=datetime.combine(day, datetime.min.time()),
            )
        )
    return out


def _records():
    return (
        _history("s1", "c1", "PPAAA", 100)
        + _history("s2", "c1", "PAAPA", 200)
        + _history("s3", "c1", "AAAAA", 300)
        + _history("s1", "c2", "PPPAA", 400)
        + _history("s4", "c2", "AAALP", 500)
    )


def test_threshold_three_finds_expected_pairs():
    entries = find_at_risk(_records(), date(2024, 12, 5))

    found = {(e.student_id, e.class_id): e.count for e in entries}
    assert found == {("s1", "c1"): 3, ("s3", "c1"): 5}


def test_critical_level_at_five():
    entries = {e.student_id: e for e in find_at_risk(_records(), date(2024, 12, 5))}

    assert entries["s3"].level == RiskLevel.CRITICAL
    assert entries["s1"].level == RiskLevel.AT_RISK
    assert entries["s3"].dates[0] == START


def test_reference_date_is_respected():
    entries = find_at_risk(_records(), date(2024, 12, 3))

    found = {(e.student_id, e.class_id) for e in entries}
    assert found == {("s3", "c1"), ("s4", "c2")}


def test_lowering_threshold_never_shrinks_result():
    records = _records()
    previous: set = set()
    for threshold in range(6, 0, -1):
        current = {(e.student_id, e.class_id) for e in find_at_risk(records, date(2024, 12, 5), threshold=threshold)}
        assert previous <= current
        previous = current


def test_empty_input_gives_empty_result():
    assert find_at_risk([], date(2024, 12, 5)) == []


def test_demo_dataset_at_risk_students():
    entries = find_at_risk(build_demo_records(), DEMO_REFERENCE_DATE)

    found = {(e.student_id, e.class_id): (e.count, e.level) for e in entries}
    assert found == {
        ("s5", "c1"): (4, RiskLevel.AT_RISK),
        ("s15", "c2"): (6, RiskLevel.CRITICAL),
        ("s21", "c3"): (3, RiskLevel.AT_RISK),
    }
