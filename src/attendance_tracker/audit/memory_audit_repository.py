from __future__ import annotations

import threading
from datetime import datetime
from typing import Sequence

from ..core.enums import AuditAction
from .model import AuditLog
from .repository import AuditLogRepository


class InMemoryAuditLogRepository(AuditLogRepository):
    def __init__(self):
        self._items: list[AuditLog] = []
        self._lock = threading.Lock()

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
        with self._lock:
            log_id = len(self._items) + 1
            self._items.append(
                AuditLog(
                    log_id=log_id,
                    user_id=user_id,
                    action=action,
                    entity_type=entity_type,
                    entity_id=entity_id,
                    changes=changes,
                    timestamp=timestamp,
                )
            )
            return log_id

    def list_recent(self, limit: int) -> Sequence[AuditLog]:
        items = sorted(self._items, key=lambda a: (a.timestamp, a.log_id), reverse=True)
        return items[: int(limit)]
