"""
Name: Session Store Tests

Responsibilities:
  - Validate save/load/clear for memory, JSON file and Redis backends
  - Validate that unusable stored data reads as "no session"
  - Validate store errors are wrapped in SessionStoreError
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock, Mock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from fieldforce.crosscutting.exceptions import SessionStoreError
from fieldforce.identity.session import Session
from fieldforce.identity.users import UserRecord, UserRole
from fieldforce.infrastructure.session_store import (
    DEFAULT_TOKEN_KEY,
    DEFAULT_USER_KEY,
    InMemorySessionStore,
    JsonFileSessionStore,
    RedisSessionStore,
)
from fieldforce.infrastructure.session_store.serialization import dump_user

pytestmark = pytest.mark.unit

_AT = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def session() -> Session:
    user = UserRecord(
        id="u1",
        username="amit",
        name="Amit Sharma",
        role=UserRole.MR,
        headquarters="Pune",
        last_active_at=_AT,
    )
    return Session(user=user, token="tok-1", created_at=_AT)


# ============================================================================
# In-memory
# ============================================================================


def test_memory_store_round_trip(session):
    store = InMemorySessionStore()
    store.save(session)

    loaded = store.load()

    assert loaded.user == session.user
    assert loaded.token == "tok-1"
    assert loaded.created_at == _AT


def test_memory_store_custom_keys(session):
    store = InMemorySessionStore(user_key="u", token_key="t")
    store.save(session)

    assert store.keys() == ["t", "u"]
    store.clear()
    assert store.keys() == []


# ============================================================================
# JSON file
# ============================================================================


def test_file_store_persists_across_instances(tmp_path, session):
    path = tmp_path / "nested" / "session.json"
    JsonFileSessionStore(path).save(session)

    loaded = JsonFileSessionStore(path).load()

    assert loaded.user.id == "u1"
    assert loaded.token == "tok-1"
    data = json.loads(path.read_text(encoding="utf-8"))
    assert set(data) == {DEFAULT_USER_KEY, DEFAULT_TOKEN_KEY}
    assert json.loads(data[DEFAULT_USER_KEY])["headquarters"] == "Pune"


def test_file_store_clear_keeps_unrelated_keys(tmp_path, session):
    path = tmp_path / "session.json"
    path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
    store = JsonFileSessionStore(path)
    store.save(session)

    store.clear()

    assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark"}
    assert store.load() is None


def test_file_store_missing_file_is_empty(tmp_path):
    store = JsonFileSessionStore(tmp_path / "absent.json")

    assert store.load() is None
    store.clear()
    assert not (tmp_path / "absent.json").exists()


def test_file_store_corrupt_file_is_empty(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{oops", encoding="utf-8")

    assert JsonFileSessionStore(path).load() is None


def test_file_store_write_failure_raises_store_error(tmp_path, session):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = JsonFileSessionStore(blocker / "session.json")

    with pytest.raises(SessionStoreError) as exc_info:
        store.save(session)

    assert exc_info.value.error_code == "SESSION_STORE_ERROR"


# ============================================================================
# Redis (mocked client)
# ============================================================================


def test_redis_store_save_uses_transaction(session):
    client = MagicMock()
    pipe = client.pipeline.return_value
    store = RedisSessionStore(client)

    store.save(session)

    client.pipeline.assert_called_once_with(transaction=True)
    pipe.set.assert_any_call("fieldforce:pharma_session_token", "tok-1")
    pipe.set.assert_any_call("fieldforce:pharma_user", dump_user(session.user))
    pipe.execute.assert_called_once()


def test_redis_store_load_decodes_bytes(session):
    client = Mock()
    client.mget.return_value = [dump_user(session.user).encode("utf-8"), b"tok-1"]
    store = RedisSessionStore(client)

    loaded = store.load()

    client.mget.assert_called_once_with(
        "fieldforce:pharma_user", "fieldforce:pharma_session_token"
    )
    assert loaded.user.id == "u1"
    assert loaded.token == "tok-1"


def test_redis_store_load_partial_is_none():
    client = Mock()
    client.mget.return_value = [None, "tok-1"]

    assert RedisSessionStore(client).load() is None


def test_redis_store_load_error_is_none():
    client = Mock()
    client.mget.side_effect = RedisConnectionError("down")

    assert RedisSessionStore(client).load() is None


def test_redis_store_clear_deletes_both_keys():
    client = Mock()

    RedisSessionStore(client, user_key="u", token_key="t").clear()

    client.delete.assert_called_once_with("fieldforce:u", "fieldforce:t")


def test_redis_store_clear_error_raises_store_error():
    client = Mock()
    client.delete.side_effect = RedisConnectionError("down")

    with pytest.raises(SessionStoreError):
        RedisSessionStore(client).clear()


def test_redis_store_from_url_requires_url():
    with pytest.raises(ValueError):
        RedisSessionStore.from_url("")
