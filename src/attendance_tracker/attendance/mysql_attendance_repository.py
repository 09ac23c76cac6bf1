from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, MarkedByRole
from ..core.exceptions import ConcurrencyError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date, normalize_mysql_datetime
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "record_id, student_id, class_id, crn, att_date, status, note, marked_by, marked_by_role, marked_at, version"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        student_id=str(r["student_id"]),
        class_id=str(r["class_id"]),
        crn=str(r["crn"]),
        date=normalize_mysql_date(r["att_date"]),
        status=AttendanceStatus(r["status"]),
        marked_by=str(r["marked_by"]),
        marked_by_role=MarkedByRole(r["marked_by_role"]),
        marked_at=normalize_mysql_datetime(r["marked_at"]),
        note=r.get("note"),
        version=int(r.get("version") or 1),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records ORDER BY att_date ASC, record_id ASC")
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_student_class(
        self,
        student_id: str,
        class_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["student_id=%s", "class_id=%s"]
        params: list[object] = [student_id, class_id]

        if start is not None:
            clauses.append("att_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("att_date <= %s")
            params.append(end)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE {where} ORDER BY att_date ASC",
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_class_on(self, class_id: str, day: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE class_id=%s AND att_date=%s ORDER BY student_id",
                (class_id, day),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_crn(self, crn: str, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE crn=%s AND att_date >= %s AND att_date < %s
                ORDER BY att_date ASC, student_id ASC
                """,
                (crn, start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_key(self, student_id: str, class_id: str, day: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE student_id=%s AND class_id=%s AND att_date=%s",
                (student_id, class_id, day),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            if expected_version is None:
                cur.execute(
                    """
                    INSERT INTO attendance_records
                        (student_id, class_id, crn, att_date, status, note, marked_by, marked_by_role, marked_at, version)
                    VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,1)
                    ON DUPLICATE KEY UPDATE
                        status=VALUES(status), note=VALUES(note), marked_by=VALUES(marked_by),
                        marked_by_role=VALUES(marked_by_role), marked_at=VALUES(marked_at), version=version+1
                    """,
                    (student_id, class_id, crn, day, status.value, note, marked_by, marked_by_role.value, marked_at),
                )
            elif expected_version == 0:
                cur.execute(
                    """
                    INSERT IGNORE INTO attendance_records
                        (student_id, class_id, crn, att_date, status, note, marked_by, marked_by_role, marked_at, version)
                    VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,1)
                    """,
                    (student_id, class_id, crn, day, status.value, note, marked_by, marked_by_role.value, marked_at),
                )
                if cur.rowcount == 0:
                    raise ConcurrencyError(
                        f"Attendance for student {student_id} on {day.isoformat()} was already recorded by someone else"
                    )
            else:
                cur.execute(
                    """
                    UPDATE attendance_records
                    SET status=%s, note=%s, marked_by=%s, marked_by_role=%s, marked_at=%s, version=version+1
                    WHERE student_id=%s AND class_id=%s AND att_date=%s AND version=%s
                    """,
                    (
                        status.value,
                        note,
                        marked_by,
                        marked_by_role.value,
                        marked_at,
                        student_id,
                        class_id,
                        day,
                        int(expected_version),
                    ),
                )
                if cur.rowcount == 0:
                    raise ConcurrencyError(
                        f"Attendance for student {student_id} on {day.isoformat()} was changed by someone else "
                        f"(expected version {expected_version})"
                    )

            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE student_id=%s AND class_id=%s AND att_date=%s",
                (student_id, class_id, day),
            )
            return _to_record(fetchone(cur))
