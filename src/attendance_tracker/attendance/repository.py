from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, MarkedByRole
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_student_class(
        self,
        student_id: str,
        class_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records for one (student, class) with start <= date <= end (either bound optional)."""

        raise NotImplementedError

    def list_for_class_on(self, class_id: str, day: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_crn(self, crn: str, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        """Records for a CRN with start <= date < end."""

        raise NotImplementedError

    def get_for_key(self, student_id: str, class_id: str, day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        student_id: str,
        class_id: str,
        crn: str,
        day: date,
        status: AttendanceStatus,
        marked_by: str,
        marked_by_role: MarkedByRole,
        marked_at: datetime,
        note: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> AttendanceRecord:
        """Insert or supersede the record for (student, class, day).

        Raises ConcurrencyError when expected_version is given and differs from
        the stored version.
        """

        raise NotImplementedError
