from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ClassOffering, SubstituteAssignment, Term


class ClassRepository(Protocol):
    def list_all(self, *, term_code: Optional[str] = None) -> Sequence[ClassOffering]:
        raise NotImplementedError

    def get_by_id(self, class_id: str) -> Optional[ClassOffering]:
        raise NotImplementedError

    def get_by_crn(self, crn: str) -> Optional[ClassOffering]:
        raise NotImplementedError


class SubstituteAssignmentRepository(Protocol):
    def list_for_user_and_class(self, substitute_id: str, class_id: str) -> Sequence[SubstituteAssignment]:
        """All assignments (active or not) linking a substitute to a class."""

        raise NotImplementedError


class TermRepository(Protocol):
    def list_all(self) -> Sequence[Term]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[Term]:
        raise NotImplementedError
