from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Thực thể miền (domain): Sinh viên trong danh sách lớp.

    A dropped student's records up to and including the drop date stay valid.
    """

    student_id: str
    student_number: str
    name: str
    is_dropped: bool = False
    dropped_date: Optional[date] = None

    def is_enrolled_on(self, day: date) -> bool:
        if not self.is_dropped:
            return True
        if self.dropped_date is None:
            return False
        return day <= self.dropped_date
