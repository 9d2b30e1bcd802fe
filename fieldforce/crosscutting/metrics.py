"""
===============================================================================
FILE: crosscutting/metrics.py
===============================================================================

CRC CARD (Module)
-------------------------------------------------------------------------------
Name:
    Metrics (Prometheus): session lifecycle observability

Responsibilities:
    - Define Prometheus counters for the account/session loop.
    - Provide small, stable helpers to record events.
    - Keep cardinality low (NO user_id, NO usernames, NO tokens).
    - Expose a helper to render the exposition payload.

Collaborators:
    - application/usecases/auth/session_holder.py: logins, logouts, validations.
    - application/usecases/users/update_user_status.py: status changes.
    - application/session_watch.py: activity stamps.

Design decisions:
    - Single dedicated CollectorRegistry: Prometheus requires singletons, and a
      private registry keeps test runs from colliding with the default one.
===============================================================================
"""

from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    generate_latest,
)

_registry = CollectorRegistry()

# -----------------------------------------------------------------------------
# Counters
# -----------------------------------------------------------------------------

_logins_total = Counter(
    "fieldforce_logins_total",
    "Login attempts by outcome",
    ["outcome"],
    registry=_registry,
)

_logouts_total = Counter(
    "fieldforce_logouts_total",
    "Sessions cleared, by reason",
    ["reason"],
    registry=_registry,
)

_session_validations_total = Counter(
    "fieldforce_session_validations_total",
    "Session validity checks by outcome",
    ["outcome"],
    registry=_registry,
)

_account_status_changes_total = Counter(
    "fieldforce_account_status_changes_total",
    "Admin account status changes",
    ["action"],
    registry=_registry,
)

_activity_stamps_total = Counter(
    "fieldforce_activity_stamps_total",
    "last_active_at stamps applied to the Directory",
    registry=_registry,
)


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------


def record_login(outcome: str) -> None:
    """outcome: success | invalid_credentials | account_deactivated | store_error."""
    _logins_total.labels(outcome=outcome).inc()


def record_logout(reason: str) -> None:
    """reason: explicit | revoked."""
    _logouts_total.labels(reason=reason).inc()


def record_session_validation(outcome: str) -> None:
    """outcome: valid | revoked | no_session."""
    _session_validations_total.labels(outcome=outcome).inc()


def record_account_status_change(action: str) -> None:
    """action: deactivate | reactivate."""
    _account_status_changes_total.labels(action=action).inc()


def record_activity_stamp(count: int = 1) -> None:
    _activity_stamps_total.inc(count)


def get_metrics_response() -> tuple[bytes, str]:
    """Return (payload, content_type) for a scrape."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST


def get_registry() -> CollectorRegistry:
    return _registry
