from __future__ import annotations

from datetime import date
from typing import Iterable

from ..attendance.dedupe import resolve_duplicates
from ..attendance.model import AttendanceRecord, DuplicateRecordWarning
from ..attendance.streaks import consecutive_absences
from ..core.constants import AT_RISK_THRESHOLD, CRITICAL_THRESHOLD
from ..core.enums import RiskLevel
from .model import AtRiskEntry


def classify(count: int, *, critical_threshold: int = CRITICAL_THRESHOLD) -> RiskLevel:
    return RiskLevel.CRITICAL if count >= critical_threshold else RiskLevel.AT_RISK


def find_at_risk_with_warnings(
    records: Iterable[AttendanceRecord],
    reference_date: date,
    *,
    threshold: int = AT_RISK_THRESHOLD,
    critical_threshold: int = CRITICAL_THRESHOLD,
) -> tuple[list[AtRiskEntry], list[DuplicateRecordWarning]]:
    records, warnings = resolve_duplicates(records)

    by_pair: dict[tuple[str, str], list[AttendanceRecord]] = {}
    for r in records:
        by_pair.setdefault((r.student_id, r.class_id), []).append(r)

    entries: list[AtRiskEntry] = []
    for (student_id, class_id), history in by_pair.items():
        streak = consecutive_absences(history, reference_date)
        if streak.count >= threshold:
            entries.append(
                AtRiskEntry(
                    student_id=student_id,
                    class_id=class_id,
                    count=streak.count,
                    dates=streak.dates,
                    level=classify(streak.count, critical_threshold=critical_threshold),
                )
            )
    return entries, warnings


def find_at_risk(
    records: Iterable[AttendanceRecord],
    reference_date: date,
    *,
    threshold: int = AT_RISK_THRESHOLD,
    critical_threshold: int = CRITICAL_THRESHOLD,
) -> list[AtRiskEntry]:
    """(student, class) pairs whose absence streak as of reference_date reaches threshold.

    Result order is unspecified; an empty list is a valid answer.
    """

    entries, _ = find_at_risk_with_warnings(
        records, reference_date, threshold=threshold, critical_threshold=critical_threshold
    )
    return entries
