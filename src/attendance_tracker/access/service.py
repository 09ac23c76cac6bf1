from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..classes.model import ClassOffering
from ..classes.repository import ClassRepository, SubstituteAssignmentRepository
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..users.model import User
from ..users.repository import UserRepository
from .policy import AccessPolicy

logger = logging.getLogger(__name__)


class AccessService:
    def __init__(
        self,
        users: UserRepository,
        classes: ClassRepository,
        assignments: SubstituteAssignmentRepository,
        *,
        policy: AccessPolicy | None = None,
    ):
        self._users = users
        self._classes = classes
        self._assignments = assignments
        self._policy = policy or AccessPolicy()

    def get_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def get_class(self, class_id: str) -> ClassOffering:
        offering = self._classes.get_by_id(class_id)
        if not offering:
            raise NotFoundError(f"Class {class_id} not found")
        return offering

    def get_class_by_crn(self, crn: str) -> ClassOffering:
        offering = self._classes.get_by_crn(crn)
        if not offering:
            raise NotFoundError(f"Class with CRN {crn} not found")
        return offering

    def can_access(self, user: User, offering: ClassOffering, *, on: Optional[date] = None) -> bool:
        assignments = ()
        if user.role == Role.GUEST_TEACHER:
            assignments = self._assignments.list_for_user_and_class(user.user_id, offering.class_id)
        return self._policy.can_access(user, offering, assignments, on=on)

    def ensure_access(self, user: User, offering: ClassOffering, *, on: Optional[date] = None) -> None:
        if not self.can_access(user, offering, on=on):
            logger.info("Access denied: user=%s role=%s class=%s", user.user_id, user.role.value, offering.class_id)
            raise AuthorizationError(f"You do not have access to class {offering.crn}")

    def accessible_classes(
        self,
        user: User,
        *,
        term_code: Optional[str] = None,
        on: Optional[date] = None,
    ) -> list[ClassOffering]:
        return [c for c in self._classes.list_all(term_code=term_code) if self.can_access(user, c, on=on)]
