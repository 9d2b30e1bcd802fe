"""
Name: Session Holder Tests

Responsibilities:
  - Login outcomes (success, unknown user, role mismatch, deactivated)
  - Logout idempotency and store cleanup
  - Eventual revocation through validate_session()
  - Restore from a persisted Session
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from fieldforce.application.usecases.auth.auth_results import (
    INVALID_CREDENTIALS_MESSAGE,
    SESSION_STORE_UNAVAILABLE_MESSAGE,
    AuthErrorCode,
)
from fieldforce.application.usecases.auth.session_holder import SessionHolder
from fieldforce.audit import (
    ACTION_LOGIN,
    ACTION_LOGOUT,
    ACTION_SESSION_REVOKED,
    ACTION_USER_DEACTIVATED,
)
from fieldforce.context import get_context_dict
from fieldforce.crosscutting.exceptions import SessionStoreError
from fieldforce.infrastructure.session_store import (
    DEFAULT_TOKEN_KEY,
    DEFAULT_USER_KEY,
    InMemorySessionStore,
    JsonFileSessionStore,
)

pytestmark = pytest.mark.unit


# ============================================================================
# Login
# ============================================================================


def test_login_success_holds_session_and_persists(holder, store, directory, clock):
    result = holder.login("amit", "x", "mr")

    assert result.success
    assert result.session.user.id == "u1"
    assert result.session.token == "tok-1"
    assert holder.is_authenticated
    assert holder.is_mr
    assert not holder.is_admin
    assert directory.get_user("u1").last_active_at == clock.now
    assert result.session.user.last_active_at == clock.now
    assert set(store.keys()) == {DEFAULT_USER_KEY, DEFAULT_TOKEN_KEY}
    assert store.get_item(DEFAULT_TOKEN_KEY) == "tok-1"


def test_login_sets_log_context(holder):
    holder.login("amit", "x", "mr")

    assert get_context_dict() == {"session_user_id": "u1", "session_role": "mr"}


def test_login_unknown_username_fails_without_session(holder, store):
    result = holder.login("ghost", "x", "mr")

    assert not result
    assert result.message == INVALID_CREDENTIALS_MESSAGE
    assert result.error.code == AuthErrorCode.INVALID_CREDENTIALS
    assert holder.current_session is None
    assert store.keys() == []


def test_login_role_mismatch_is_treated_as_no_match(holder):
    result = holder.login("amit", "x", "admin")

    assert not result.success
    assert result.message == INVALID_CREDENTIALS_MESSAGE
    assert holder.current_session is None


def test_login_unknown_role_string_fails(holder):
    result = holder.login("amit", "x", "superuser")

    assert result.error.code == AuthErrorCode.INVALID_CREDENTIALS


def test_login_deactivated_account_reports_reason(holder, store):
    holder.update_user_status("u1", False, "policy violation", actor_id="a1")

    result = holder.login("amit", "x", "mr")

    assert not result.success
    assert result.error.code == AuthErrorCode.ACCOUNT_DEACTIVATED
    assert "policy violation" in result.message
    assert "contact your administrator" in result.message
    assert holder.current_session is None
    assert store.keys() == []


def test_login_deactivated_without_reason_uses_default(directory, store, clock):
    holder = SessionHolder(
        directory, store, clock=clock, default_deactivation_message="Blocked"
    )
    holder.update_user_status("u1", False)

    result = holder.login("amit", "x", "mr")

    assert result.message == "account deactivated: Blocked. contact your administrator"


def test_admin_login_reports_admin(holder):
    result = holder.login("admin", "pw", "admin")

    assert result.success
    assert holder.is_admin
    assert not holder.is_mr


def test_login_emits_audit_event(holder, audit_repo):
    holder.login("amit", "x", "mr")

    events = audit_repo.list_events(action=ACTION_LOGIN)
    assert len(events) == 1
    assert events[0].actor == "user:u1"
    assert events[0].metadata == {"role": "mr"}


# ============================================================================
# Logout
# ============================================================================


def test_logout_clears_session_and_store(holder, store):
    holder.login("amit", "x", "mr")

    holder.logout()

    assert holder.current_session is None
    assert store.keys() == []
    assert get_context_dict() == {}


def test_logout_is_idempotent(holder, store, audit_repo):
    holder.login("amit", "x", "mr")

    holder.logout()
    holder.logout()

    assert holder.current_session is None
    assert store.keys() == []
    assert len(audit_repo.list_events(action=ACTION_LOGOUT)) == 1


def test_validate_after_logout_returns_false_without_side_effects(
    holder, directory, audit_repo
):
    holder.login("amit", "x", "mr")
    holder.logout()
    before = directory.get_user("u1")

    assert holder.validate_session() is False
    assert directory.get_user("u1") == before
    assert audit_repo.list_events(action=ACTION_SESSION_REVOKED) == []


# ============================================================================
# Validation / revocation
# ============================================================================


def test_validate_session_true_while_active(holder):
    holder.login("amit", "x", "mr")

    assert holder.validate_session() is True
    assert holder.is_authenticated


def test_deactivation_revokes_on_next_validation(holder, store, directory, audit_repo):
    assert holder.login("amit", "x", "mr").session.user.id == "u1"

    result = holder.update_user_status("u1", False, "policy violation")

    assert result.error is None
    assert directory.get_user("u1").is_active is False
    # Revocation is eventual: the Session survives until the next check.
    assert holder.is_authenticated

    assert holder.validate_session() is False
    assert holder.current_session is None
    assert store.get_item(DEFAULT_USER_KEY) is None
    assert store.get_item(DEFAULT_TOKEN_KEY) is None
    assert len(audit_repo.list_events(action=ACTION_SESSION_REVOKED)) == 1


def test_status_change_actor_defaults_to_session_user(holder, directory, audit_repo):
    holder.login("admin", "pw", "admin")

    holder.update_user_status("u1", False, "left")

    info = directory.get_user("u1").deactivation
    assert info.deactivated_by == "a1"
    event = audit_repo.list_events(action=ACTION_USER_DEACTIVATED)[0]
    assert event.actor == "user:a1"


def test_revocation_survives_store_clear_failure(directory, clock):
    class FailingClearStore(InMemorySessionStore):
        def clear(self) -> None:
            raise SessionStoreError("disk gone")

    holder = SessionHolder(directory, FailingClearStore(), clock=clock)
    holder.login("amit", "x", "mr")
    holder.update_user_status("u1", False)

    assert holder.validate_session() is False
    assert holder.current_session is None


def test_login_store_save_failure_is_reported_without_side_effects(
    directory, clock, audit_repo
):
    class FailingSaveStore(InMemorySessionStore):
        def save(self, session) -> None:
            raise SessionStoreError("disk gone")

    store = FailingSaveStore()
    holder = SessionHolder(directory, store, audit_repository=audit_repo, clock=clock)
    before = directory.get_user("u1")

    result = holder.login("amit", "x", "mr")

    assert not result.success
    assert result.error.code == AuthErrorCode.SESSION_STORE_UNAVAILABLE
    assert result.message == SESSION_STORE_UNAVAILABLE_MESSAGE
    assert holder.current_session is None
    assert directory.get_user("u1") == before
    assert store.keys() == []
    assert audit_repo.list_events(action=ACTION_LOGIN) == []


def test_login_with_unwritable_file_store_fails_cleanly(directory, clock, tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")
    holder = SessionHolder(
        directory, JsonFileSessionStore(blocker / "session.json"), clock=clock
    )

    result = holder.login("amit", "x", "mr")

    assert result.error.code == AuthErrorCode.SESSION_STORE_UNAVAILABLE
    assert directory.get_user("u1").last_active_at is None


def test_revocation_listener_fires_on_direct_validation(holder, directory):
    seen = []
    holder.add_revocation_listener(seen.append)
    holder.login("amit", "x", "mr")

    directory._users.pop("u1")

    assert holder.validate_session() is False
    assert seen == ["u1"]
    assert holder.validate_session() is False
    assert seen == ["u1"]


def test_revocation_listener_not_called_on_logout(holder):
    seen = []
    holder.add_revocation_listener(seen.append)
    holder.login("amit", "x", "mr")

    holder.logout()

    assert seen == []


def test_failing_revocation_listener_does_not_break_validation(holder, directory):
    seen = []

    def broken(user_id):
        raise RuntimeError("listener down")

    holder.add_revocation_listener(broken)
    holder.add_revocation_listener(seen.append)
    holder.login("amit", "x", "mr")
    holder.update_user_status("u1", False)

    assert holder.validate_session() is False
    assert seen == ["u1"]


def test_removed_user_revokes_session(holder, directory):
    holder.login("amit", "x", "mr")
    directory._users.pop("u1")

    assert holder.validate_session() is False
    assert holder.current_session is None


def test_reactivated_user_can_log_in_again(holder, directory):
    holder.update_user_status("u1", False, "x")
    holder.update_user_status("u1", True)

    assert directory.get_user("u1").deactivation is None
    assert holder.login("amit", "x", "mr").success


# ============================================================================
# Activity + restore
# ============================================================================


def test_touch_last_active_stamps_directory(holder, directory, clock):
    holder.login("amit", "x", "mr")
    clock.advance(timedelta(minutes=5))

    assert holder.touch_last_active() is True
    assert directory.get_user("u1").last_active_at == clock.now


def test_touch_last_active_without_session_is_noop(holder):
    assert holder.touch_last_active() is False


def test_touch_last_active_missing_user_is_silent(holder, directory):
    holder.login("amit", "x", "mr")
    directory._users.pop("u1")

    assert holder.touch_last_active() is False


def test_restore_rehydrates_persisted_session(directory, store, holder, clock):
    holder.login("amit", "x", "mr")

    fresh = SessionHolder(directory, store, clock=clock)
    session = fresh.restore()

    assert session is not None
    assert session.user.id == "u1"
    assert session.token == "tok-1"
    assert fresh.is_authenticated


def test_restore_with_partial_entries_clears_store(directory, clock):
    store = InMemorySessionStore()
    store.set_item(DEFAULT_TOKEN_KEY, "orphan-token")

    fresh = SessionHolder(directory, store, clock=clock)

    assert fresh.restore() is None
    assert store.keys() == []
    assert not fresh.is_authenticated


def test_restore_with_corrupt_snapshot_clears_store(directory, clock):
    store = InMemorySessionStore()
    store.set_item(DEFAULT_USER_KEY, "{not json")
    store.set_item(DEFAULT_TOKEN_KEY, "tok")

    fresh = SessionHolder(directory, store, clock=clock)

    assert fresh.restore() is None
    assert store.keys() == []
