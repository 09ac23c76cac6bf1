from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..core.enums import AuditAction
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_datetime
from .model import AuditLog
from .repository import AuditLogRepository


class MySQLAuditLogRepository(AuditLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(
        self,
        *,
        user_id: str,
        action: AuditAction,
        entity_type: str,
        entity_id: str,
        changes: str,
        timestamp: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO audit_logs(user_id, action, entity_type, entity_id, changes, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (user_id, action.value, entity_type, entity_id, changes, timestamp),
            )
            return int(cur.lastrowid)

    def list_recent(self, limit: int) -> Sequence[AuditLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT log_id, user_id, action, entity_type, entity_id, changes, created_at
                FROM audit_logs
                ORDER BY created_at DESC, log_id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                AuditLog(
                    log_id=int(r["log_id"]),
                    user_id=str(r["user_id"]),
                    action=AuditAction(r["action"]),
                    entity_type=r["entity_type"],
                    entity_id=str(r["entity_id"]),
                    changes=r["changes"],
                    timestamp=normalize_mysql_datetime(r["created_at"]),
                )
                for r in fetchall(cur)
            ]
