from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from ..core.enums import AuditAction
from .model import AuditLog


class AuditLogRepository(Protocol):
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
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[AuditLog]:
        raise NotImplementedError
