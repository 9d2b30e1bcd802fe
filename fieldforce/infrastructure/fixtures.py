"""
============================================================
CRC CARD: infrastructure/fixtures.py
============================================================
Module: Bundled demo data loader

Responsibilities:
  - Read the packaged demo users + company (fieldforce/fixtures/users.json).
  - Validate rows with the same pydantic model as the session snapshot.
  - Fill in deactivation metadata for inactive rows that lack it, so every
    record satisfies the active/metadata invariant.

Collaborators:
  - importlib.resources (package data)
  - infrastructure.session_store.serialization.UserSnapshotModel
  - identity.users.UserRecord / Company
============================================================
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from importlib import resources

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..identity.users import Company, UserRecord
from .session_store.serialization import UserSnapshotModel

FIXTURE_PACKAGE = "fieldforce.fixtures"
FIXTURE_FILE = "users.json"


class _CompanyModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    theme_color: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""


class _FixtureModel(BaseModel):
    company: _CompanyModel | None = None
    users: list[UserSnapshotModel] = []


@dataclass(frozen=True)
class DemoData:
    company: Company | None
    users: tuple[UserRecord, ...]


def parse_fixture(raw: str | dict, *, seeded_at: datetime | None = None) -> DemoData:
    """
    Validate fixture content and build domain records.

    Raises:
        ValueError: malformed JSON or rows that fail validation
    """
    seeded_at = seeded_at or datetime.now(timezone.utc)
    if isinstance(raw, str):
        model = _FixtureModel.model_validate_json(raw)
    else:
        model = _FixtureModel.model_validate(raw)

    users = []
    for row in model.users:
        if not row.is_active and row.deactivated_at is None:
            row = row.model_copy(update={"deactivated_at": seeded_at})
        users.append(row.to_record())

    company = None
    if model.company is not None:
        company = Company(**model.company.model_dump())

    return DemoData(company=company, users=tuple(users))


def load_demo_data(*, seeded_at: datetime | None = None) -> DemoData:
    """Load the demo data bundled with the package."""
    text = resources.files(FIXTURE_PACKAGE).joinpath(FIXTURE_FILE).read_text(
        encoding="utf-8"
    )
    return parse_fixture(json.loads(text), seeded_at=seeded_at)
