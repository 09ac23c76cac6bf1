"""Demo dataset for the in-memory backend.

Ten days of attendance ending on DEMO_REFERENCE_DATE, with a few students on
absence streaks so the at-risk and dashboard views have something to show.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

from ..attendance.memory_attendance_repository import InMemoryAttendanceRepository
from ..attendance.model import AttendanceRecord
from ..classes.memory_class_repository import (
    InMemoryClassRepository,
    InMemorySubstituteAssignmentRepository,
    InMemoryTermRepository,
)
from ..classes.model import ClassOffering, SubstituteAssignment, Term
from ..core.enums import AttendanceStatus, MarkedByRole, Role
from ..students.memory_student_repository import InMemoryStudentRepository
from ..students.model import Student
from ..users.memory_user_repository import InMemoryUserRepository
from ..users.model import User

DEMO_REFERENCE_DATE = date(2025, 10, 21)
DEMO_DAYS = 10

USERS = [
    User("1", "Sarah Johnson", "sarah.johnson@school.edu", Role.TEACHER),
    User("2", "Mike Chen", "mike.chen@school.edu", Role.GUEST_TEACHER),
    User("3", "Linda Martinez", "linda.martinez@school.edu", Role.ADMIN),
    User("4", "Robert Davis", "robert.davis@school.edu", Role.TEACHER),
    User("5", "Emily White", "emily.white@school.edu", Role.TEACHER),
    User("6", "James Wilson", "james.wilson@school.edu", Role.DEPARTMENTAL, department="Mathematics"),
]

TERMS = [
    Term("F25", "Fall 2025", date(2025, 8, 25), date(2025, 12, 19), "2025-2026"),
    Term("S26", "Spring 2026", date(2026, 1, 12), date(2026, 5, 8), "2025-2026"),
]

_FALL_START = date(2025, 10, 1)
_FALL_END = date(2025, 12, 19)

CLASSES = [
    ClassOffering("c1", "10234", "Mathematics 101", "F25", "Mathematics", 3, "1", _FALL_START, _FALL_END, 10),
    ClassOffering("c2", "10567", "English Literature", "F25", "English", 3, "1", _FALL_START, _FALL_END, 8),
    ClassOffering("c3", "10891", "Biology Lab", "F25", "Science", 4, "4", _FALL_START, _FALL_END, 6),
    ClassOffering("c4", "11023", "World History", "F25", "History", 3, "4", _FALL_START, _FALL_END, 4),
    ClassOffering("c5", "11345", "Statistics", "F25", "Mathematics", 3, "5", _FALL_START, _FALL_END, 2),
]

SUBSTITUTE_ASSIGNMENTS = [
    SubstituteAssignment("sa1", "c3", "10891", "2", date(2025, 10, 13), date(2025, 10, 24), is_active=True),
    SubstituteAssignment("sa2", "c4", "11023", "2", date(2025, 9, 1), date(2025, 9, 12), is_active=False),
]

_NAMES = [
    "Alex Anderson", "Beth Brown", "Charlie Clark", "Diana Davis", "Ethan Evans",
    "Fiona Foster", "George Gray", "Hannah Harris", "Isaac Inez", "Julia Jackson",
    "Kevin King", "Laura Lee", "Marcus Miller", "Nina Nelson", "Oliver Owen",
    "Paula Price", "Quinn Rogers", "Rachel Ross", "Samuel Smith", "Tara Taylor",
    "Uma Turner", "Victor Vance", "Wendy Walker", "Xavier Young", "Yara Zimmerman",
    "Zoe Adams", "Aaron Baker", "Bella Carter", "Carl Dixon", "Daisy Ellis",
]

_ROSTER_RANGES = {"c1": (1, 10), "c2": (11, 18), "c3": (19, 24), "c4": (25, 28), "c5": (29, 30)}

# (class, student) -> days before the reference date marked absent
_ABSENCES = {
    ("c1", "s2"): {0, 1, 4, 5, 7},
    ("c1", "s5"): {0, 1, 2, 3},
    ("c1", "s8"): {3, 6, 8},
    ("c2", "s12"): {0, 2, 5, 7},
    ("c2", "s15"): {0, 1, 2, 3, 4, 5},
    ("c3", "s21"): {0, 1, 2},
}
_LATE = {("c1", "s3"): {0}, ("c3", "s20"): {1}}
_EXCUSED = {("c2", "s14"): {2}}


def _student(n: int) -> Student:
    return Student(student_id=f"s{n}", student_number=f"STU{n:03d}", name=_NAMES[n - 1])


def _status_for(class_id: str, student_id: str, offset: int) -> tuple[AttendanceStatus, str]:
    key = (class_id, student_id)
    if offset in _ABSENCES.get(key, ()):
        return AttendanceStatus.ABSENT, "Absent"
    if offset in _LATE.get(key, ()):
        return AttendanceStatus.LATE, "Arrived 15 minutes late"
    if offset in _EXCUSED.get(key, ()):
        return AttendanceStatus.EXCUSED, "Medical appointment"
    return AttendanceStatus.PRESENT, ""


def build_demo_records(reference_date: date = DEMO_REFERENCE_DATE) -> list[AttendanceRecord]:
    records: list[AttendanceRecord] = []
    record_id = 1
    for offering in CLASSES:
        lo, hi = _ROSTER_RANGES[offering.class_id]
        for n in range(lo, hi + 1):
            student_id = f"s{n}"
            for offset in range(DEMO_DAYS):
                day = reference_date - timedelta(days=offset)
                status, note = _status_for(offering.class_id, student_id, offset)
                substitute = offering.class_id == "c3" and offset < 7
                records.append(
                    AttendanceRecord(
                        record_id=record_id,
                        student_id=student_id,
                        class_id=offering.class_id,
                        crn=offering.crn,
                        date=day,
                        status=status,
                        marked_by="2" if substitute else offering.instructor_id,
                        marked_by_role=MarkedByRole.SUBSTITUTE if substitute else MarkedByRole.INSTRUCTOR,
                        marked_at=datetime.combine(day, time(8, 30)),
                        note=note or None,
                    )
                )
                record_id += 1
    return records


def seed_memory_store(
    *,
    users: InMemoryUserRepository,
    terms: InMemoryTermRepository,
    classes: InMemoryClassRepository,
    assignments: InMemorySubstituteAssignmentRepository,
    students: InMemoryStudentRepository,
    attendance: InMemoryAttendanceRepository,
) -> None:
    for u in USERS:
        users.add(u)
    for t in TERMS:
        terms.add(t)
    for c in CLASSES:
        classes.add(c)
    for a in SUBSTITUTE_ASSIGNMENTS:
        assignments.add(a)
    for class_id, (lo, hi) in _ROSTER_RANGES.items():
        for n in range(lo, hi + 1):
            students.enroll(class_id, _student(n))
    for r in build_demo_records():
        attendance.add(r)
