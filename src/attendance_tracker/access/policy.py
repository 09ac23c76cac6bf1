from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Sequence

from ..classes.model import ClassOffering, SubstituteAssignment
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..users.model import User

Rule = Callable[["AccessPolicy", User, ClassOffering, Sequence[SubstituteAssignment], Optional[date]], bool]


@dataclass(frozen=True)
class AccessPolicy:
    """Role-derived access to a class offering's attendance.

    Rules are looked up in a single table keyed by role; a role with no rule is
    denied. For substitutes, `require_active_flag` and `check_date_range`
    choose which assignment checks apply (any one passing assignment grants
    access).
    """

    require_active_flag: bool = True
    check_date_range: bool = False

    def can_access(
        self,
        user: User,
        offering: ClassOffering,
        assignments: Sequence[SubstituteAssignment] = (),
        *,
        on: Optional[date] = None,
    ) -> bool:
        rule = _RULES.get(user.role)
        if rule is None:
            return False
        return rule(self, user, offering, assignments, on)

    def assignment_grants(self, assignment: SubstituteAssignment, user: User, offering: ClassOffering, on: Optional[date]) -> bool:
        if assignment.substitute_id != user.user_id or assignment.class_id != offering.class_id:
            return False
        if self.require_active_flag and not assignment.is_active:
            return False
        if self.check_date_range:
            if on is None:
                raise ValidationError("A reference date is required to check substitute assignment dates")
            if not assignment.covers(on):
                return False
        return True


def _admin(policy: AccessPolicy, user: User, offering: ClassOffering, assignments, on) -> bool:
    return True


def _departmental(policy: AccessPolicy, user: User, offering: ClassOffering, assignments, on) -> bool:
    return user.department is not None and offering.department == user.department


def _teacher(policy: AccessPolicy, user: User, offering: ClassOffering, assignments, on) -> bool:
    return offering.instructor_id == user.user_id


def _guest_teacher(policy: AccessPolicy, user: User, offering: ClassOffering, assignments, on) -> bool:
    return any(policy.assignment_grants(a, user, offering, on) for a in assignments)


_RULES: dict[Role, Rule] = {
    Role.ADMIN: _admin,
    Role.DEPARTMENTAL: _departmental,
    Role.TEACHER: _teacher,
    Role.GUEST_TEACHER: _guest_teacher,
}
