from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ClassOffering:
    """Thực thể miền (domain): Lớp học phần (CRN).

    The date range is half-open: [start_date, end_date).
    """

    class_id: str
    crn: str
    name: str
    term_code: str
    department: str
    credit_hours: int
    instructor_id: str
    start_date: date
    end_date: date
    roster_size: int = 0

    def covers(self, day: date) -> bool:
        return self.start_date <= day < self.end_date


@dataclass(frozen=True)
class SubstituteAssignment:
    """Time-bounded grant of a guest-teacher to one class (both ends inclusive)."""

    assignment_id: str
    class_id: str
    crn: str
    substitute_id: str
    start_date: date
    end_date: date
    is_active: bool = True

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class Term:
    code: str
    name: str
    start_date: date
    end_date: date
    academic_year: str
