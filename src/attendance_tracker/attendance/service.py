from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Sequence

from ..access.service import AccessService
from ..audit.repository import AuditLogRepository
from ..classes.model import ClassOffering
from ..classes.repository import ClassRepository
from ..core.enums import AttendanceStatus, AuditAction, MarkedByRole, Role
from ..core.exceptions import ConcurrencyError, NotFoundError, ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from .dedupe import resolve_duplicates
from .model import AbsenceStreak, AttendanceMark, AttendanceRecord, AttendanceStats
from .repository import AttendanceRepository
from .streaks import consecutive_absences

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        classes: ClassRepository,
        access: AccessService,
        audit: AuditLogRepository,
    ):
        self._attendance = attendance
        self._students = students
        self._classes = classes
        self._access = access
        self._audit = audit

    def _get_class(self, class_id: str) -> ClassOffering:
        offering = self._classes.get_by_id(class_id)
        if not offering:
            raise NotFoundError(f"Class {class_id} not found")
        return offering

    def _get_roster_student(self, class_id: str, student_id: str) -> Student:
        student = next((s for s in self._students.list_for_class(class_id) if s.student_id == student_id), None)
        if not student:
            raise NotFoundError(f"Student {student_id} is not enrolled in class {class_id}")
        return student

    def consecutive_absences(self, student_id: str, class_id: str, as_of: date) -> AbsenceStreak:
        self._get_class(class_id)
        if not self._students.get_by_id(student_id):
            raise NotFoundError(f"Student {student_id} not found")

        history = self._attendance.list_for_student_class(student_id, class_id, end=as_of)
        return consecutive_absences(history, as_of)

    def day_records(self, class_id: str, day: date) -> list[AttendanceRecord]:
        self._get_class(class_id)
        records, _ = resolve_duplicates(self._attendance.list_for_class_on(class_id, day))
        return records

    def class_day_stats(self, class_id: str, day: date) -> AttendanceStats:
        """Status counts for one class on one day.

        attendance_rate counts late arrivals as attended, over recorded marks.
        """

        records = self.day_records(class_id, day)
        roster = [s for s in self._students.list_for_class(class_id) if s.is_enrolled_on(day)]

        counts = {status: 0 for status in AttendanceStatus}
        for r in records:
            counts[r.status] += 1

        recorded = len(records)
        attended = counts[AttendanceStatus.PRESENT] + counts[AttendanceStatus.LATE]
        rate = (attended / recorded * 100) if recorded else 0.0

        return AttendanceStats(
            total_students=len(roster),
            present=counts[AttendanceStatus.PRESENT],
            absent=counts[AttendanceStatus.ABSENT],
            late=counts[AttendanceStatus.LATE],
            excused=counts[AttendanceStatus.EXCUSED],
            attendance_rate=round(rate, 1),
        )

    def submit_roster(
        self,
        *,
        user_id: str,
        class_id: str,
        day: date,
        marks: Sequence[AttendanceMark],
        now: datetime,
    ) -> list[AttendanceRecord]:
        """Upsert one day's marks for a class.

        Each mark supersedes any earlier record for the same student and day.
        Every changed record gets one audit entry.
        """

        user = self._access.get_user(user_id)
        offering = self._get_class(class_id)
        self._access.ensure_access(user, offering, on=day)

        if not offering.covers(day):
            raise ValidationError(
                f"{day.isoformat()} is outside class {offering.crn} "
                f"({offering.start_date.isoformat()} to {offering.end_date.isoformat()})"
            )
        if not marks:
            raise ValidationError("No attendance marks submitted")

        seen: set[str] = set()
        for m in marks:
            if m.student_id in seen:
                raise ValidationError(f"Student {m.student_id} appears more than once in the submission")
            seen.add(m.student_id)
            student = self._get_roster_student(class_id, m.student_id)
            if not student.is_enrolled_on(day):
                raise ValidationError(f"Student {m.student_id} was dropped before {day.isoformat()}")

        # Version checks run before any write so a stale mark rejects the whole roster.
        for m in marks:
            if m.expected_version is None:
                continue
            existing = self._attendance.get_for_key(m.student_id, class_id, day)
            current_version = existing.version if existing else 0
            if m.expected_version != current_version:
                raise ConcurrencyError(
                    f"Attendance for student {m.student_id} on {day.isoformat()} was changed by someone else "
                    f"(version {current_version}, expected {m.expected_version})"
                )

        marked_by_role = MarkedByRole.SUBSTITUTE if user.role == Role.GUEST_TEACHER else MarkedByRole.INSTRUCTOR

        saved: list[AttendanceRecord] = []
        for m in marks:
            previous = self._attendance.get_for_key(m.student_id, class_id, day)
            record = self._attendance.upsert(
                student_id=m.student_id,
                class_id=class_id,
                crn=offering.crn,
                day=day,
                status=m.status,
                marked_by=user.user_id,
                marked_by_role=marked_by_role,
                marked_at=now,
                note=m.note,
                expected_version=m.expected_version,
            )
            saved.append(record)

            if previous is None:
                self._audit.add(
                    user_id=user.user_id,
                    action=AuditAction.ATTENDANCE_MARKED,
                    entity_type="attendance",
                    entity_id=str(record.record_id),
                    changes=f"{m.student_id} {day.isoformat()}: {m.status.value}",
                    timestamp=now,
                )
            elif previous.status != record.status or (previous.note or "") != (record.note or ""):
                self._audit.add(
                    user_id=user.user_id,
                    action=AuditAction.ATTENDANCE_UPDATED,
                    entity_type="attendance",
                    entity_id=str(record.record_id),
                    changes=f"{m.student_id} {day.isoformat()}: {previous.status.value} -> {record.status.value}",
                    timestamp=now,
                )

        logger.info(
            "Roster submitted: class=%s date=%s marks=%d by=%s (%s)",
            offering.crn,
            day.isoformat(),
            len(saved),
            user.user_id,
            marked_by_role.value,
        )
        return saved
