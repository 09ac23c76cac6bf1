from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .model import ClassOffering, SubstituteAssignment, Term
from .repository import ClassRepository, SubstituteAssignmentRepository, TermRepository


class InMemoryClassRepository(ClassRepository):
    def __init__(self, offerings: Iterable[ClassOffering] = ()):
        self._by_id: dict[str, ClassOffering] = {c.class_id: c for c in offerings}

    def add(self, offering: ClassOffering) -> None:
        self._by_id[offering.class_id] = offering

    def list_all(self, *, term_code: Optional[str] = None) -> Sequence[ClassOffering]:
        return [c for c in self._by_id.values() if term_code is None or c.term_code == term_code]

    def get_by_id(self, class_id: str) -> Optional[ClassOffering]:
        return self._by_id.get(class_id)

    def get_by_crn(self, crn: str) -> Optional[ClassOffering]:
        return next((c for c in self._by_id.values() if c.crn == crn), None)


class InMemorySubstituteAssignmentRepository(SubstituteAssignmentRepository):
    def __init__(self, assignments: Iterable[SubstituteAssignment] = ()):
        self._items: list[SubstituteAssignment] = list(assignments)

    def add(self, assignment: SubstituteAssignment) -> None:
        self._items.append(assignment)

    def list_for_user_and_class(self, substitute_id: str, class_id: str) -> Sequence[SubstituteAssignment]:
        return [a for a in self._items if a.substitute_id == substitute_id and a.class_id == class_id]


class InMemoryTermRepository(TermRepository):
    def __init__(self, terms: Iterable[Term] = ()):
        self._by_code: dict[str, Term] = {t.code: t for t in terms}

    def add(self, term: Term) -> None:
        self._by_code[term.code] = term

    def list_all(self) -> Sequence[Term]:
        return sorted(self._by_code.values(), key=lambda t: t.start_date)

    def get_by_code(self, code: str) -> Optional[Term]:
        return self._by_code.get(code)
