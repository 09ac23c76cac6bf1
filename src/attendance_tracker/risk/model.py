from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..attendance.model import DuplicateRecordWarning
from ..core.enums import RiskLevel


@dataclass(frozen=True)
class AtRiskEntry:
    student_id: str
    class_id: str
    count: int
    dates: list[date]
    level: RiskLevel


@dataclass(frozen=True)
class AtRiskRow:
    """Read-model for the at-risk report (entry joined with names)."""

    student_id: str
    student_number: str
    student_name: str
    class_id: str
    crn: str
    class_name: str
    count: int
    dates: list[date]
    level: RiskLevel
    last_absence: Optional[date] = None


@dataclass(frozen=True)
class AtRiskReport:
    rows: list[AtRiskRow]
    warnings: list[DuplicateRecordWarning] = field(default_factory=list)

    @property
    def critical_count(self) -> int:
        return sum(1 for r in self.rows if r.level == RiskLevel.CRITICAL)
