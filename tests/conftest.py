from __future__ import annotations

from datetime import date, datetime

import pytest

from attendance_tracker.classes.model import ClassOffering, SubstituteAssignment, Term
from attendance_tracker.container import build_container, memory_repositories
from attendance_tracker.core.enums import Role
from attendance_tracker.students.model import Student
from attendance_tracker.users.model import User

DEC_START = date(2024, 12, 1)
DEC_END = date(2025, 1, 1)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 12, 5, 9, 0, 0)


@pytest.fixture
def users():
    return {
        "admin": User("a1", "Linda Martinez", "linda@school.edu", Role.ADMIN),
        "teacher": User("t1", "Sarah Johnson", "sarah@school.edu", Role.TEACHER),
        "other_teacher": User("t2", "Robert Davis", "robert@school.edu", Role.TEACHER),
        "guest": User("g1", "Mike Chen", "mike@school.edu", Role.GUEST_TEACHER),
        "dept": User("d1", "James Wilson", "james@school.edu", Role.DEPARTMENTAL, department="Mathematics"),
    }


@pytest.fixture
def math_class() -> ClassOffering:
    return ClassOffering(
        class_id="c1",
        crn="20001",
        name="Mathematics 101",
        term_code="F24",
        department="Mathematics",
        credit_hours=3,
        instructor_id="t1",
        start_date=DEC_START,
        end_date=DEC_END,
        roster_size=10,
    )


@pytest.fixture
def english_class() -> ClassOffering:
    return ClassOffering(
        class_id="c2",
        crn="20002",
        name="English Literature",
        term_code="F24",
        department="English",
        credit_hours=4,
        instructor_id="t2",
        start_date=DEC_START,
        end_date=DEC_END,
        roster_size=3,
    )


@pytest.fixture
def repos(users, math_class, english_class):
    """Memory store: c1 has 10 active students + 2 dropped in November, c2 has 3."""

    repos = memory_repositories()
    for u in users.values():
        repos.users.add(u)
    repos.terms.add(Term("F24", "Fall 2024", date(2024, 8, 26), date(2024, 12, 20), "2024-2025"))
    repos.terms.add(Term("S25", "Spring 2025", date(2025, 1, 13), date(2025, 5, 9), "2024-2025"))
    repos.classes.add(math_class)
    repos.classes.add(english_class)

    for n in range(1, 11):
        repos.students.enroll("c1", Student(f"s{n}", f"STU{n:03d}", f"Student {n}"))
    repos.students.enroll("c1", Student("s11", "STU011", "Student 11", is_dropped=True, dropped_date=date(2024, 11, 20)))
    repos.students.enroll("c1", Student("s12", "STU012", "Student 12", is_dropped=True, dropped_date=date(2024, 11, 25)))
    for n in range(21, 24):
        repos.students.enroll("c2", Student(f"s{n}", f"STU{n:03d}", f"Student {n}"))

    repos.assignments.add(
        SubstituteAssignment("sa1", "c2", "20002", "g1", date(2024, 12, 2), date(2024, 12, 6), is_active=True)
    )
    return repos


@pytest.fixture
def container(repos):
    return build_container(repos)
