"""
Name: In-Memory Directory Tests

Responsibilities:
  - Lookups, listing order and filters
  - Insert / replace / stamp semantics
  - Instance isolation
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from fieldforce.identity.users import UserRecord, UserRole
from fieldforce.infrastructure.repositories import InMemoryUserDirectory

pytestmark = pytest.mark.unit


def _user(uid: str, username: str, name: str, role=UserRole.MR) -> UserRecord:
    return UserRecord(id=uid, username=username, name=name, role=role)


def test_find_by_username_and_role_requires_both():
    directory = InMemoryUserDirectory([_user("u1", "amit", "Amit")])

    assert directory.find_by_username_and_role("amit", UserRole.MR).id == "u1"
    assert directory.find_by_username_and_role("amit", UserRole.ADMIN) is None
    assert directory.find_by_username_and_role("ghost", UserRole.MR) is None


def test_list_users_sorted_by_name_then_id_and_filtered():
    directory = InMemoryUserDirectory(
        [
            _user("u3", "zed", "zed"),
            _user("u2", "bob", "Bob"),
            _user("u1", "bob2", "bob"),
            _user("a1", "admin", "Admin", role=UserRole.ADMIN),
        ]
    )

    assert [u.id for u in directory.list_users()] == ["a1", "u1", "u2", "u3"]
    assert [u.id for u in directory.list_users(role=UserRole.MR)] == ["u1", "u2", "u3"]
    assert directory.list_users(is_active=False) == []


def test_add_duplicate_id_raises():
    directory = InMemoryUserDirectory([_user("u1", "amit", "Amit")])

    with pytest.raises(ValueError):
        directory.add_user(_user("u1", "other", "Other"))


def test_replace_user_unknown_returns_false():
    directory = InMemoryUserDirectory()

    assert directory.replace_user(_user("u1", "amit", "Amit")) is False
    assert len(directory) == 0


def test_stamp_last_active():
    at = datetime(2025, 2, 2, tzinfo=timezone.utc)
    directory = InMemoryUserDirectory([_user("u1", "amit", "Amit")])

    assert directory.stamp_last_active("u1", at) is True
    assert directory.get_user("u1").last_active_at == at
    assert directory.stamp_last_active("missing", at) is False


def test_instances_are_isolated():
    first = InMemoryUserDirectory([_user("u1", "amit", "Amit")])
    second = InMemoryUserDirectory()

    assert len(first) == 1
    assert second.get_user("u1") is None
