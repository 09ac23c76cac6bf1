from __future__ import annotations

from datetime import date

import pytest

from attendance_tracker.access.policy import AccessPolicy
from attendance_tracker.access.service import AccessService
from attendance_tracker.core.exceptions import AuthorizationError, NotFoundError


def test_accessible_classes_by_role(container, users):
    svc = container.access_service

    def ids(user, **kw):
        return sorted(c.class_id for c in svc.accessible_classes(user, **kw))

    assert ids(users["admin"]) == ["c1", "c2"]
    assert ids(users["dept"]) == ["c1"]
    assert ids(users["teacher"]) == ["c1"]
    assert ids(users["guest"]) == ["c2"]
    assert ids(users["admin"], term_code="S25") == []


def test_date_checked_policy_through_service(repos, users):
    svc = AccessService(repos.users, repos.classes, repos.assignments, policy=AccessPolicy(check_date_range=True))

    assert [c.class_id for c in svc.accessible_classes(users["guest"], on=date(2024, 12, 3))] == ["c2"]
    assert svc.accessible_classes(users["guest"], on=date(2024, 12, 10)) == []


def test_ensure_access_and_lookups(container, users):
    svc = container.access_service

    with pytest.raises(AuthorizationError):
        svc.ensure_access(users["guest"], svc.get_class("c1"))
    with pytest.raises(NotFoundError):
        svc.get_class("missing")
    with pytest.raises(NotFoundError):
        svc.get_user("nobody")
    assert svc.get_class_by_crn("20002").class_id == "c2"
