from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def list_for_class(self, class_id: str) -> Sequence[Student]:
        """Roster for a class, dropped students included."""

        raise NotImplementedError
