from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import Student
from .repository import StudentRepository


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT student_id, student_number, name FROM students WHERE student_id=%s", (student_id,))
            r = fetchone(cur)
            if not r:
                return None
            return Student(student_id=str(r["student_id"]), student_number=r["student_number"], name=r["name"])

    def list_for_class(self, class_id: str) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.student_id, s.student_number, s.name, e.is_dropped, e.dropped_date
                FROM class_enrollments e
                JOIN students s ON s.student_id = e.student_id
                WHERE e.class_id=%s
                ORDER BY s.student_number ASC
                """,
                (class_id,),
            )
            return [
                Student(
                    student_id=str(r["student_id"]),
                    student_number=r["student_number"],
                    name=r["name"],
                    is_dropped=bool(r.get("is_dropped")),
                    dropped_date=normalize_mysql_date(r.get("dropped_date")),
                )
                for r in fetchall(cur)
            ]
