"""
Name: Access Policy Tests

Responsibilities:
  - Validate the ACTIVE <-> INACTIVE transitions and their metadata
  - Validate the deactivated-login message
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from fieldforce.crosscutting.exceptions import InvalidTransitionError
from fieldforce.domain.access_policy import (
    AccessState,
    access_state,
    deactivate,
    deactivated_login_message,
    reactivate,
)
from fieldforce.identity.users import UserRecord, UserRole

pytestmark = pytest.mark.unit

_AT = datetime(2025, 1, 10, 8, 30, tzinfo=timezone.utc)


def _mr(**overrides) -> UserRecord:
    base = dict(id="u1", username="amit", name="Amit", role=UserRole.MR)
    base.update(overrides)
    return UserRecord(**base)


def test_deactivate_sets_metadata():
    updated = deactivate(_mr(), at=_AT, actor_id="a1", reason="  policy violation ")

    assert updated.is_active is False
    assert access_state(updated) == AccessState.INACTIVE
    assert updated.deactivation.deactivated_at == _AT
    assert updated.deactivation.deactivated_by == "a1"
    assert updated.deactivation.reason == "policy violation"


def test_deactivate_blank_reason_becomes_none():
    updated = deactivate(_mr(), at=_AT, reason="   ")

    assert updated.deactivation.reason is None
    assert updated.deactivation.deactivated_by is None


def test_reactivate_clears_metadata():
    inactive = deactivate(_mr(), at=_AT, reason="x")

    active = reactivate(inactive)

    assert active.is_active is True
    assert active.deactivation is None
    assert access_state(active) == AccessState.ACTIVE


def test_transitions_are_reversible_indefinitely():
    user = _mr()
    for _ in range(3):
        user = reactivate(deactivate(user, at=_AT))
    assert user.is_active and user.deactivation is None


def test_deactivate_inactive_is_rejected():
    inactive = deactivate(_mr(), at=_AT)

    with pytest.raises(InvalidTransitionError):
        deactivate(inactive, at=_AT)


def test_reactivate_active_is_rejected():
    with pytest.raises(InvalidTransitionError):
        reactivate(_mr())


def test_transitions_do_not_mutate_input():
    original = _mr()
    deactivate(original, at=_AT)
    assert original.is_active is True


@pytest.mark.parametrize(
    "reason,expected",
    [
        ("policy violation", "account deactivated: policy violation. contact your administrator"),
        (None, "account deactivated: Your account has been deactivated. contact your administrator"),
        ("Left.", "account deactivated: Left. contact your administrator"),
    ],
)
def test_deactivated_login_message(reason, expected):
    user = deactivate(_mr(), at=_AT, reason=reason)

    assert deactivated_login_message(user, "Your account has been deactivated") == expected
