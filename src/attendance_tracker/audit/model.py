from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import AuditAction


@dataclass(frozen=True)
class AuditLog:
    log_id: int
    user_id: str
    action: AuditAction
    entity_type: str
    entity_id: str
    changes: str
    timestamp: datetime
