"""
============================================================
CRC CARD: infrastructure/session_store/serialization.py
============================================================
Module: Session snapshot (de)serialization

Responsibilities:
  - Map UserRecord <-> JSON snapshot (camelCase keys, the shape the field app
    writes to local storage).
  - Rebuild a Session from the two stored values (snapshot + token).
  - Treat unusable stored data as "no session" (never raise to callers).

Collaborators:
  - pydantic (BaseModel + camelCase alias generator) for validation
  - identity.users.UserRecord / DeactivationInfo
  - identity.session.Session
  - session stores (in_memory / file_store / redis_store)

Notes:
  - The snapshot is taken right after login stamps last_active_at, so
    lastActiveAt doubles as the session creation timestamp on restore.
============================================================
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ...crosscutting.logger import logger
from ...identity.session import Session
from ...identity.users import DeactivationInfo, UserRecord, UserRole


class UserSnapshotModel(BaseModel):
    """Wire shape of the stored user snapshot."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    id: str
    username: str
    name: str
    role: UserRole
    is_active: bool = True
    headquarters: str = ""
    email: str = ""
    phone: str = ""
    company_id: str = ""
    created_at: datetime | None = None
    last_active_at: datetime | None = None
    deactivated_at: datetime | None = None
    deactivated_by: str | None = None
    deactivation_reason: str | None = None

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserSnapshotModel":
        info = user.deactivation
        return cls(
            id=user.id,
            username=user.username,
            name=user.name,
            role=user.role,
            is_active=user.is_active,
            headquarters=user.headquarters,
            email=user.email,
            phone=user.phone,
            company_id=user.company_id,
            created_at=user.created_at,
            last_active_at=user.last_active_at,
            deactivated_at=info.deactivated_at if info else None,
            deactivated_by=info.deactivated_by if info else None,
            deactivation_reason=info.reason if info else None,
        )

    def to_record(self) -> UserRecord:
        deactivation = None
        if self.deactivated_at is not None:
            deactivation = DeactivationInfo(
                deactivated_at=self.deactivated_at,
                deactivated_by=self.deactivated_by,
                reason=self.deactivation_reason,
            )
        return UserRecord(
            id=self.id,
            username=self.username,
            name=self.name,
            role=self.role,
            is_active=self.is_active,
            headquarters=self.headquarters,
            email=self.email,
            phone=self.phone,
            company_id=self.company_id,
            created_at=self.created_at,
            last_active_at=self.last_active_at,
            deactivation=deactivation,
        )


def dump_user(user: UserRecord) -> str:
    """UserRecord -> JSON string (camelCase)."""
    return UserSnapshotModel.from_record(user).model_dump_json(by_alias=True)


def load_user(raw: str) -> UserRecord:
    """
    JSON string -> UserRecord.

    Raises:
        ValueError: malformed JSON, schema mismatch or broken invariant
    """
    # R: pydantic's ValidationError is a ValueError subclass.
    return UserSnapshotModel.model_validate_json(raw).to_record()


def decode_session(user_raw: str | None, token: str | None) -> Session | None:
    """
    Rebuild a Session from stored values.

    Returns None when either value is missing or the snapshot is unusable.
    """
    if not user_raw or not token:
        return None

    try:
        user = load_user(user_raw)
    except ValueError as exc:
        logger.warning(
            "Stored session snapshot is unreadable; ignoring it",
            extra={"error": str(exc)},
        )
        return None

    return Session(user=user, token=token, created_at=user.last_active_at)
