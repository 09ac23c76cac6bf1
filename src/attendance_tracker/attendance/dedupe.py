from __future__ import annotations

import logging
from typing import Iterable

from .model import AttendanceRecord, DuplicateRecordWarning

logger = logging.getLogger(__name__)


def _recency(record: AttendanceRecord):
    return (record.marked_at, record.record_id)


def resolve_duplicates(
    records: Iterable[AttendanceRecord],
) -> tuple[list[AttendanceRecord], list[DuplicateRecordWarning]]:
    """Keep one record per (student, class, date).

    The most recently marked record wins (ties go to the highest record_id).
    Input order of the surviving records is preserved. Each collision is
    reported as a warning instead of raising.
    """

    groups: dict[tuple, list[AttendanceRecord]] = {}
    order: list[tuple] = []
    for r in records:
        if r.key not in groups:
            groups[r.key] = []
            order.append(r.key)
        groups[r.key].append(r)

    kept: list[AttendanceRecord] = []
    warnings: list[DuplicateRecordWarning] = []
    for key in order:
        group = groups[key]
        winner = max(group, key=_recency)
        kept.append(winner)
        if len(group) > 1:
            warning = DuplicateRecordWarning(
                student_id=winner.student_id,
                class_id=winner.class_id,
                date=winner.date,
                kept_record_id=winner.record_id,
                discarded_record_ids=tuple(sorted(r.record_id for r in group if r is not winner)),
            )
            logger.warning(warning.message())
            warnings.append(warning)

    return kept, warnings


def find_duplicates(records: Iterable[AttendanceRecord]) -> list[DuplicateRecordWarning]:
    """Report duplicate keys without filtering the input."""
    _, warnings = resolve_duplicates(records)
    return warnings
