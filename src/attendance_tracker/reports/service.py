from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Sequence

from ..access.service import AccessService
from ..attendance.dedupe import resolve_duplicates
from ..attendance.repository import AttendanceRepository
from ..audit.model import AuditLog
from ..audit.repository import AuditLogRepository
from ..classes.model import ClassOffering, Term
from ..classes.repository import ClassRepository, TermRepository
from ..common.validators import require_valid_range
from ..core.constants import DEFAULT_AUDIT_LIMIT
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..students.repository import StudentRepository
from ..users.model import User
from .completion import completion_rate
from .missing import missing_attendance
from .model import CompletionResult, CRNBreakdownRow, DepartmentSummary, MissingAttendance


class ReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        classes: ClassRepository,
        terms: TermRepository,
        access: AccessService,
        audit: AuditLogRepository,
    ):
        self._attendance = attendance
        self._students = students
        self._classes = classes
        self._terms = terms
        self._access = access
        self._audit = audit

    def completion_rate(self, crn: str, start: date, end: date) -> CompletionResult:
        require_valid_range(start, end)
        offering = self._classes.get_by_crn(crn)
        if not offering:
            raise NotFoundError(f"Class with CRN {crn} not found")
        return self._completion_for(offering, start, end)

    def _completion_for(self, offering: ClassOffering, start: date, end: date) -> CompletionResult:
        roster = self._students.list_for_class(offering.class_id)
        records = self._attendance.list_for_crn(offering.crn, start=start, end=end)
        return completion_rate(offering, roster, records, start, end)

    def missing_attendance(self, day: date, *, term_code: Optional[str] = None) -> list[MissingAttendance]:
        offerings = self._classes.list_all(term_code=term_code)
        return self._missing_for(offerings, day)

    def _missing_for(self, offerings: Sequence[ClassOffering], day: date) -> list[MissingAttendance]:
        rosters = {c.class_id: self._students.list_for_class(c.class_id) for c in offerings}
        records = [r for c in offerings for r in self._attendance.list_for_class_on(c.class_id, day)]
        return missing_attendance(offerings, rosters, records, day)

    def _filtered_classes(
        self,
        user: User,
        *,
        on: date,
        term_code: Optional[str],
        instructor_id: Optional[str],
    ) -> list[ClassOffering]:
        offerings = self._access.accessible_classes(user, term_code=term_code, on=on)
        if instructor_id is not None:
            offerings = [c for c in offerings if c.instructor_id == instructor_id]
        return offerings

    def crn_breakdown(
        self,
        user: User,
        *,
        start: date,
        end: date,
        term_code: Optional[str] = None,
        instructor_id: Optional[str] = None,
    ) -> list[CRNBreakdownRow]:
        """Per-offering completion and status counts over [start, end)."""

        require_valid_range(start, end)
        rows: list[CRNBreakdownRow] = []
        for c in self._filtered_classes(user, on=start, term_code=term_code, instructor_id=instructor_id):
            completion = self._completion_for(c, start, end)
            records, _ = resolve_duplicates(self._attendance.list_for_crn(c.crn, start=start, end=end))

            counts = {status: 0 for status in AttendanceStatus}
            for r in records:
                counts[r.status] += 1
            total = len(records)
            attended = counts[AttendanceStatus.PRESENT] + counts[AttendanceStatus.LATE]

            rows.append(
                CRNBreakdownRow(
                    class_id=c.class_id,
                    crn=c.crn,
                    name=c.name,
                    term_code=c.term_code,
                    department=c.department,
                    instructor_id=c.instructor_id,
                    credit_hours=c.credit_hours,
                    enrollment=c.roster_size,
                    completion=round(completion.rate),
                    attendance_rate=round(attended / total * 100) if total else 0,
                    total_records=total,
                    present=counts[AttendanceStatus.PRESENT],
                    absent=counts[AttendanceStatus.ABSENT],
                    late=counts[AttendanceStatus.LATE],
                    excused=counts[AttendanceStatus.EXCUSED],
                )
            )
        return rows

    def department_summary(
        self,
        user: User,
        today: date,
        *,
        term_code: Optional[str] = None,
        instructor_id: Optional[str] = None,
    ) -> DepartmentSummary:
        """Dashboard totals; completion runs from each offering's start through today."""

        offerings = self._filtered_classes(user, on=today, term_code=term_code, instructor_id=instructor_id)

        rates = []
        for c in offerings:
            start = min(c.start_date, today + timedelta(days=1))
            rates.append(self._completion_for(c, start, today + timedelta(days=1)).rate)
        avg = sum(rates) / len(rates) if rates else 0.0

        return DepartmentSummary(
            total_crns=len(offerings),
            total_credit_hours=sum(c.credit_hours for c in offerings),
            total_enrollment=sum(c.roster_size for c in offerings),
            avg_completion=round(avg),
            missing_today=len(self._missing_for(offerings, today)),
            missing_yesterday=len(self._missing_for(offerings, today - timedelta(days=1))),
        )

    def audit_logs(self, user: User, *, limit: int = DEFAULT_AUDIT_LIMIT) -> Sequence[AuditLog]:
        if user.role != Role.ADMIN:
            raise AuthorizationError("Only administrators can view audit logs")
        return self._audit.list_recent(max(int(limit), 0))

    def terms(self) -> Sequence[Term]:
        return self._terms.list_all()
