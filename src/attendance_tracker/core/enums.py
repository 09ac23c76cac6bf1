from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Vai trò người dùng dùng cho phân quyền."""

    TEACHER = "teacher"
    GUEST_TEACHER = "guest-teacher"
    ADMIN = "admin"
    DEPARTMENTAL = "departmental"


class AttendanceStatus(str, Enum):
    """Trạng thái điểm danh của một sinh viên trong một buổi học."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"


class MarkedByRole(str, Enum):
    """Who submitted the record: instructor of record or a substitute."""

    INSTRUCTOR = "instructor"
    SUBSTITUTE = "substitute"


class RiskLevel(str, Enum):
    AT_RISK = "at_risk"
    CRITICAL = "critical"


class AuditAction(str, Enum):
    ATTENDANCE_MARKED = "ATTENDANCE_MARKED"
    ATTENDANCE_UPDATED = "ATTENDANCE_UPDATED"
