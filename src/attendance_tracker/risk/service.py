from __future__ import annotations

from datetime import date
from typing import Optional

from ..access.service import AccessService
from ..attendance.repository import AttendanceRepository
from ..classes.repository import ClassRepository
from ..core.constants import AT_RISK_THRESHOLD, CRITICAL_THRESHOLD
from ..core.exceptions import ValidationError
from ..students.repository import StudentRepository
from ..users.model import User
from .aggregator import find_at_risk_with_warnings
from .model import AtRiskReport, AtRiskRow


class RiskService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        classes: ClassRepository,
        access: AccessService,
        *,
        threshold: int = AT_RISK_THRESHOLD,
        critical_threshold: int = CRITICAL_THRESHOLD,
    ):
        self._attendance = attendance
        self._students = students
        self._classes = classes
        self._access = access
        self._threshold = int(threshold)
        self._critical_threshold = int(critical_threshold)

    def at_risk_students(
        self,
        user: User,
        reference_date: date,
        *,
        threshold: Optional[int] = None,
        class_id: Optional[str] = None,
    ) -> AtRiskReport:
        """At-risk students in the classes this user may see, longest streak first."""

        threshold = self._threshold if threshold is None else int(threshold)
        if threshold < 1:
            raise ValidationError("Threshold must be at least 1")

        visible = {c.class_id: c for c in self._access.accessible_classes(user, on=reference_date)}
        if class_id is not None:
            visible = {k: v for k, v in visible.items() if k == class_id}

        records = [r for r in self._attendance.list_all() if r.class_id in visible]
        entries, warnings = find_at_risk_with_warnings(
            records,
            reference_date,
            threshold=threshold,
            critical_threshold=self._critical_threshold,
        )

        rows: list[AtRiskRow] = []
        for e in entries:
            offering = visible[e.class_id]
            roster = {s.student_id: s for s in self._students.list_for_class(e.class_id)}
            student = roster.get(e.student_id)
            rows.append(
                AtRiskRow(
                    student_id=e.student_id,
                    student_number=student.student_number if student else "N/A",
                    student_name=student.name if student else "Unknown",
                    class_id=e.class_id,
                    crn=offering.crn,
                    class_name=offering.name,
                    count=e.count,
                    dates=e.dates,
                    level=e.level,
                    last_absence=e.dates[-1] if e.dates else None,
                )
            )

        rows.sort(key=lambda r: (-r.count, r.crn, r.student_id))
        return AtRiskReport(rows=rows, warnings=warnings)

    def at_risk_count_by_class(self, user: User, class_id: str, reference_date: date) -> int:
        offering = self._access.get_class(class_id)
        self._access.ensure_access(user, offering, on=reference_date)
        return len(self.at_risk_students(user, reference_date, class_id=class_id).rows)
