from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Thực thể miền (domain): User.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập DB).
    `department` is only meaningful for departmental users.
    """

    user_id: str
    name: str
    email: str
    role: Role
    department: Optional[str] = None
