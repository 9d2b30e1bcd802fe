"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure the test environment (no .env, APP_ENV=test)
  - Provide an isolated Directory, session store and clock per test
  - Build the Session Holder used by most unit tests

Notes:
  - Fixtures are function-scoped: every test owns its Directory
"""

import os
from datetime import datetime, timezone

import pytest

from fieldforce.crosscutting import config as app_config

app_config.Settings.model_config["env_file"] = None
os.environ.setdefault("APP_ENV", "test")

from fieldforce.application.usecases.auth.session_holder import (  # noqa: E402
    SessionHolder,
)
from fieldforce.context import clear_context  # noqa: E402
from fieldforce.identity.users import UserRecord, UserRole  # noqa: E402
from fieldforce.infrastructure.repositories import (  # noqa: E402
    InMemoryAuditEventRepository,
    InMemoryUserDirectory,
)
from fieldforce.infrastructure.session_store import InMemorySessionStore  # noqa: E402

FIXED_NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


class FakeClock:
    """R: Deterministic clock; advance() moves time forward."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta) -> None:
        self.now = self.now + delta


@pytest.fixture(autouse=True)
def _reset_context():
    yield
    clear_context()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def amit() -> UserRecord:
    return UserRecord(
        id="u1",
        username="amit",
        name="Amit Sharma",
        role=UserRole.MR,
        headquarters="Pune",
    )


@pytest.fixture
def admin_user() -> UserRecord:
    return UserRecord(id="a1", username="admin", name="Admin", role=UserRole.ADMIN)


@pytest.fixture
def directory(amit: UserRecord, admin_user: UserRecord) -> InMemoryUserDirectory:
    return InMemoryUserDirectory([amit, admin_user])


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def audit_repo() -> InMemoryAuditEventRepository:
    return InMemoryAuditEventRepository()


@pytest.fixture
def holder(directory, store, audit_repo, clock) -> SessionHolder:
    return SessionHolder(
        directory,
        store,
        audit_repository=audit_repo,
        clock=clock,
        token_factory=lambda: "tok-1",
    )
