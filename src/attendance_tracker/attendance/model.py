from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, MarkedByRole


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Bản ghi điểm danh.

    One student's status in one class session on one date. Records are
    superseded by re-submission, never deleted.
    """

    record_id: int
    student_id: str
    class_id: str
    crn: str
    date: date
    status: AttendanceStatus
    marked_by: str
    marked_by_role: MarkedByRole
    marked_at: datetime
    note: Optional[str] = None
    version: int = 1

    @property
    def key(self) -> tuple[str, str, date]:
        return (self.student_id, self.class_id, self.date)


@dataclass(frozen=True)
class AttendanceMark:
    """One line of a submitted roster."""

    student_id: str
    status: AttendanceStatus
    note: Optional[str] = None
    expected_version: Optional[int] = None


@dataclass(frozen=True)
class DuplicateRecordWarning:
    """Two or more records share a (student, class, date) key."""

    student_id: str
    class_id: str
    date: date
    kept_record_id: int
    discarded_record_ids: tuple[int, ...]

    def message(self) -> str:
        return (
            f"Duplicate attendance for student {self.student_id} in class {self.class_id} "
            f"on {self.date.isoformat()}: kept #{self.kept_record_id}, "
            f"ignored {', '.join(f'#{i}' for i in self.discarded_record_ids)}"
        )


@dataclass(frozen=True)
class AbsenceStreak:
    count: int
    dates: list[date]
    warnings: list[DuplicateRecordWarning] = field(default_factory=list)


@dataclass(frozen=True)
class AttendanceStats:
    """Read-model for a class roster on one day."""

    total_students: int
    present: int
    absent: int
    late: int
    excused: int
    attendance_rate: float

    @property
    def recorded(self) -> int:
        return self.present + self.absent + self.late + self.excused
