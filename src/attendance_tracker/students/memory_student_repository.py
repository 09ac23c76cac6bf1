from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from .model import Student
from .repository import StudentRepository


class InMemoryStudentRepository(StudentRepository):
    """Rosters keyed by class id.

    Drop status lives on the roster entry, so the same student id may appear
    dropped in one class and active in another.
    """

    def __init__(self, rosters: Mapping[str, Iterable[Student]] | None = None):
        self._rosters: dict[str, list[Student]] = {}
        for class_id, students in (rosters or {}).items():
            for s in students:
                self.enroll(class_id, s)

    def enroll(self, class_id: str, student: Student) -> None:
        roster = self._rosters.setdefault(class_id, [])
        roster[:] = [s for s in roster if s.student_id != student.student_id]
        roster.append(student)

    def get_by_id(self, student_id: str) -> Optional[Student]:
        for roster in self._rosters.values():
            for s in roster:
                if s.student_id == student_id:
                    return s
        return None

    def list_for_class(self, class_id: str) -> Sequence[Student]:
        return list(self._rosters.get(class_id, []))
