from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id, name, email, role, department FROM users WHERE user_id=%s", (user_id,))
            r = fetchone(cur)
            if not r:
                return None
            return User(
                user_id=str(r["user_id"]),
                name=r["name"],
                email=r["email"],
                role=Role(r["role"]),
                department=r.get("department"),
            )
