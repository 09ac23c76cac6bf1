from __future__ import annotations

from typing import Iterable, Optional

from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self, users: Iterable[User] = ()):
        self._by_id: dict[str, User] = {u.user_id: u for u in users}

    def add(self, user: User) -> None:
        self._by_id[user.user_id] = user

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._by_id.get(user_id)
