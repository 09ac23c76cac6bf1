from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..attendance.model import DuplicateRecordWarning
from ..classes.model import ClassOffering


@dataclass(frozen=True)
class CompletionResult:
    crn: str
    start: date
    end: date
    expected: int
    actual: int
    rate: float
    warnings: list[DuplicateRecordWarning] = field(default_factory=list)


@dataclass(frozen=True)
class MissingAttendance:
    offering: ClassOffering
    date: date
    recorded: int
    expected: int

    @property
    def is_empty(self) -> bool:
        return self.recorded == 0


@dataclass(frozen=True)
class CRNBreakdownRow:
    class_id: str
    crn: str
    name: str
    term_code: str
    department: str
    instructor_id: str
    credit_hours: int
    enrollment: int
    completion: int
    attendance_rate: int
    total_records: int
    present: int
    absent: int
    late: int
    excused: int


@dataclass(frozen=True)
class DepartmentSummary:
    total_crns: int
    total_credit_hours: int
    total_enrollment: int
    avg_completion: int
    missing_today: int
    missing_yesterday: int
