"""
===============================================================================
CRC CARD: fieldforce/container.py (Composition Root / manual DI)
===============================================================================

Responsibilities:
  - Compose dependencies (directory, session store, audit, use cases) per DIP.
  - Keep lazy singletons with lru_cache for shared state.
  - Centralize runtime decisions based on Settings (store backend, seeding,
    timer intervals, simulated latency).

Collaborators:
  - fieldforce.crosscutting.config.get_settings
  - fieldforce.domain.repositories.* (ports)
  - fieldforce.infrastructure.* (implementations)
  - fieldforce.application.* (use cases, timers, auth context)

Notes:
  - No business logic here.
  - Tests build their own objects; reset_container() clears the caches.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache, partial
from pathlib import Path

from .application import ActivityStamper, AuthContext, ValidityPoller, seed_directory
from .application.usecases import (
    AddMRUseCase,
    ListUsersUseCase,
    SessionHolder,
    UpdateUserStatusUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import AuditEventRepository, SessionStore, UserDirectory
from .identity.session import generate_session_token
from .infrastructure.fixtures import DemoData, load_demo_data
from .infrastructure.repositories import (
    InMemoryAuditEventRepository,
    InMemoryUserDirectory,
)
from .infrastructure.session_store import (
    InMemorySessionStore,
    JsonFileSessionStore,
    RedisSessionStore,
)

# =============================================================================
# Data + repositories (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_demo_data() -> DemoData:
    """Bundled demo company and users."""
    return load_demo_data()


@lru_cache(maxsize=1)
def get_user_directory() -> UserDirectory:
    """
    In-memory Directory, seeded with the demo users unless disabled.
    """
    directory = InMemoryUserDirectory()
    if get_settings().seed_demo_users:
        seed_directory(directory, get_demo_data().users)
    return directory


@lru_cache(maxsize=1)
def get_audit_repository() -> AuditEventRepository:
    return InMemoryAuditEventRepository()


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    """
    Session store by backend:
      - memory: process-local (tests)
      - file:   JSON file at session_store_path
      - redis:  redis_url
    """
    settings = get_settings()
    keys = {
        "user_key": settings.session_user_key,
        "token_key": settings.session_token_key,
    }
    backend = settings.session_store_backend
    if backend == "redis":
        return RedisSessionStore.from_url(settings.redis_url, **keys)
    if backend == "file":
        return JsonFileSessionStore(Path(settings.session_store_path), **keys)
    return InMemorySessionStore(**keys)


# =============================================================================
# Use cases
# =============================================================================


def get_update_user_status_use_case() -> UpdateUserStatusUseCase:
    return UpdateUserStatusUseCase(
        get_user_directory(), audit_repository=get_audit_repository()
    )


def get_add_mr_use_case() -> AddMRUseCase:
    return AddMRUseCase(
        get_user_directory(),
        audit_repository=get_audit_repository(),
        default_company_id=get_demo_data().company.id,
    )


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(get_user_directory())


# =============================================================================
# Session (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_session_holder() -> SessionHolder:
    settings = get_settings()
    return SessionHolder(
        get_user_directory(),
        get_session_store(),
        status_use_case=get_update_user_status_use_case(),
        audit_repository=get_audit_repository(),
        token_factory=partial(generate_session_token, settings.session_token_bytes),
        default_deactivation_message=settings.default_deactivation_message,
    )


@lru_cache(maxsize=1)
def get_auth_context() -> AuthContext:
    settings = get_settings()
    holder = get_session_holder()
    return AuthContext(
        holder,
        poller=ValidityPoller(
            holder, interval_seconds=settings.validity_poll_interval_seconds
        ),
        stamper=ActivityStamper(
            holder, interval_seconds=settings.activity_stamp_interval_seconds
        ),
        company=get_demo_data().company,
        simulated_latency_seconds=settings.simulated_latency_seconds,
    )


def reset_container() -> None:
    """Drop every cached singleton (tests, settings reload)."""
    for getter in (
        get_auth_context,
        get_session_holder,
        get_session_store,
        get_audit_repository,
        get_user_directory,
        get_demo_data,
    ):
        getter.cache_clear()
