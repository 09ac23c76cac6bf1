from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import AttendanceStatus, MarkedByRole
from ..core.exceptions import ConcurrencyError
from .dedupe import resolve_duplicates
from .model import AttendanceRecord
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Ordered in-process record store.

    Records are kept in insertion order. `add` stores a record as-is (used for
    seeding and imports, so duplicates can exist); `upsert` is the only write
    path for roster submissions and always supersedes in place.
    """

    def __init__(self, records: Iterable[AttendanceRecord] = ()):
        self._records: list[AttendanceRecord] = []
        self._next_id = 1
        self._lock = threading.Lock()
        for r in records:
            self.add(r)

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        with self._lock:
            self._records.append(record)
            self._next_id = max(self._next_id, record.record_id + 1)
        return record

    def list_all(self) -> Sequence[AttendanceRecord]:
        return list(self._records)

    def list_for_student_class(
        self,
        student_id: str,
        class_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        return [
            r
            for r in self._records
            if r.student_id == student_id
            and r.class_id == class_id
            and (start is None or r.date >= start)
            and (end is None or r.date <= end)
        ]

    def list_for_class_on(self, class_id: str, day: date) -> Sequence[AttendanceRecord]:
        return [r for r in self._records if r.class_id == class_id and r.date == day]

    def list_for_crn(self, crn: str, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        return [r for r in self._records if r.crn == crn and start <= r.date < end]

    def get_for_key(self, student_id: str, class_id: str, day: date) -> Optional[AttendanceRecord]:
        matches = [r for r in self._records if r.key == (student_id, class_id, day)]
        if not matches:
            return None
        kept, _ = resolve_duplicates(matches)
        return kept[0]

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
        with self._lock:
            existing = self.get_for_key(student_id, class_id, day)
            current_version = existing.version if existing else 0
            if expected_version is not None and expected_version != current_version:
                raise ConcurrencyError(
                    f"Attendance for student {student_id} on {day.isoformat()} was changed by someone else "
                    f"(version {current_version}, expected {expected_version})"
                )

            if existing is None:
                record = AttendanceRecord(
                    record_id=self._next_id,
                    student_id=student_id,
                    class_id=class_id,
                    crn=crn,
                    date=day,
                    status=status,
                    marked_by=marked_by,
                    marked_by_role=marked_by_role,
                    marked_at=marked_at,
                    note=note,
                    version=1,
                )
                self._next_id += 1
                self._records.append(record)
                return record

            record = replace(
                existing,
                status=status,
                note=note,
                marked_by=marked_by,
                marked_by_role=marked_by_role,
                marked_at=marked_at,
                version=existing.version + 1,
            )
            idx = next(i for i, r in enumerate(self._records) if r is existing)
            self._records[idx] = record
            return record
