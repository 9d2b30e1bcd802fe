"""
Name: Directory Seed

Responsibilities:
  - Load demo user records into a fresh Directory
  - Keep operations idempotent (entries already present are left alone)

Collaborators:
  - UserDirectory (get_user / add_user)

Constraints:
  - Records must already satisfy the UserRecord invariants (the fixture
    loader fills in missing deactivation metadata)
"""

from __future__ import annotations

from typing import Iterable

from ..crosscutting.logger import logger
from ..domain.repositories import UserDirectory
from ..identity.users import UserRecord


def seed_directory(directory: UserDirectory, records: Iterable[UserRecord]) -> int:
    """
    R: Add every record whose id is not in the Directory yet.

    Returns:
        Number of records added
    """
    added = 0
    skipped = 0
    for record in records:
        if directory.get_user(record.id) is not None:
            skipped += 1
            continue
        directory.add_user(record)
        added += 1

    logger.info("Directory seeded", extra={"added": added, "skipped": skipped})
    return added
