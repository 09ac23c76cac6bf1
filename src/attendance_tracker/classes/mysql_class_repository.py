from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import ClassOffering, SubstituteAssignment, Term
from .repository import ClassRepository, SubstituteAssignmentRepository, TermRepository

_CLASS_COLUMNS = (
    "class_id, crn, name, term_code, department, credit_hours, instructor_id, start_date, end_date, roster_size"
)


def _to_offering(r: dict) -> ClassOffering:
    return ClassOffering(
        class_id=str(r["class_id"]),
        crn=str(r["crn"]),
        name=r["name"],
        term_code=r["term_code"],
        department=r["department"],
        credit_hours=int(r.get("credit_hours") or 0),
        instructor_id=str(r["instructor_id"]),
        start_date=normalize_mysql_date(r["start_date"]),
        end_date=normalize_mysql_date(r["end_date"]),
        roster_size=int(r.get("roster_size") or 0),
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, term_code: Optional[str] = None) -> Sequence[ClassOffering]:
        with db_cursor(self._conn_factory) as (_, cur):
            if term_code is None:
                cur.execute(f"SELECT {_CLASS_COLUMNS} FROM classes ORDER BY crn")
            else:
                cur.execute(f"SELECT {_CLASS_COLUMNS} FROM classes WHERE term_code=%s ORDER BY crn", (term_code,))
            return [_to_offering(r) for r in fetchall(cur)]

    def get_by_id(self, class_id: str) -> Optional[ClassOffering]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_CLASS_COLUMNS} FROM classes WHERE class_id=%s", (class_id,))
            r = fetchone(cur)
            return _to_offering(r) if r else None

    def get_by_crn(self, crn: str) -> Optional[ClassOffering]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_CLASS_COLUMNS} FROM classes WHERE crn=%s", (crn,))
            r = fetchone(cur)
            return _to_offering(r) if r else None


class MySQLSubstituteAssignmentRepository(SubstituteAssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _query(self, where: str, params: tuple) -> Sequence[SubstituteAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT assignment_id, class_id, crn, substitute_id, start_date, end_date, is_active
                FROM substitute_assignments
                WHERE {where}
                ORDER BY start_date ASC
                """,
                params,
            )
            return [
                SubstituteAssignment(
                    assignment_id=str(r["assignment_id"]),
                    class_id=str(r["class_id"]),
                    crn=str(r["crn"]),
                    substitute_id=str(r["substitute_id"]),
                    start_date=normalize_mysql_date(r["start_date"]),
                    end_date=normalize_mysql_date(r["end_date"]),
                    is_active=bool(r["is_active"]),
                )
                for r in fetchall(cur)
            ]

    def list_for_user_and_class(self, substitute_id: str, class_id: str) -> Sequence[SubstituteAssignment]:
        return self._query("substitute_id=%s AND class_id=%s", (substitute_id, class_id))


class MySQLTermRepository(TermRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_term(r: dict) -> Term:
        return Term(
            code=r["code"],
            name=r["name"],
            start_date=normalize_mysql_date(r["start_date"]),
            end_date=normalize_mysql_date(r["end_date"]),
            academic_year=r["academic_year"],
        )

    def list_all(self) -> Sequence[Term]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT code, name, start_date, end_date, academic_year FROM terms ORDER BY start_date")
            return [self._to_term(r) for r in fetchall(cur)]

    def get_by_code(self, code: str) -> Optional[Term]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT code, name, start_date, end_date, academic_year FROM terms WHERE code=%s", (code,))
            r = fetchone(cur)
            return self._to_term(r) if r else None
