from __future__ import annotations

from datetime import date

from ..core.enums import AttendanceStatus
from ..core.exceptions import InvalidRangeError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_valid_range(start: date, end: date) -> None:
    if end < start:
        raise InvalidRangeError(f"Invalid date range: end {end.isoformat()} is before start {start.isoformat()}")


def parse_status(value: str) -> AttendanceStatus:
    try:
        return AttendanceStatus(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"Unknown attendance status {value!r} (expected one of: {allowed})") from None
