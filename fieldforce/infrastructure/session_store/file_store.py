"""
============================================================
CRC CARD: infrastructure/session_store/file_store.py
============================================================
Class: JsonFileSessionStore

Responsibilities:
  - Persist the Session across restarts the way the web client uses
    localStorage: one JSON object whose string values sit under two keys
    (user snapshot, session token).
  - Write atomically (temp file + os.replace) so a crash never leaves a
    half-written file behind.
  - Preserve unrelated keys already present in the file.

Collaborators:
  - serialization.dump_user / decode_session
  - crosscutting.exceptions.SessionStoreError (I/O failures on write/clear)
  - crosscutting.logger

Notes:
  - A missing or corrupt file reads as "no session"; only writes raise.
============================================================
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

from ...crosscutting.exceptions import SessionStoreError
from ...crosscutting.logger import logger
from ...identity.session import Session
from .in_memory import DEFAULT_TOKEN_KEY, DEFAULT_USER_KEY
from .serialization import decode_session, dump_user


class JsonFileSessionStore:
    """SessionStore backed by a small JSON file."""

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        user_key: str = DEFAULT_USER_KEY,
        token_key: str = DEFAULT_TOKEN_KEY,
    ) -> None:
        self._path = Path(path)
        self._user_key = user_key
        self._token_key = token_key

    @property
    def path(self) -> Path:
        return self._path

    # =========================================================
    # Helpers
    # =========================================================
    def _read_items(self) -> Dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            logger.warning(
                "Session file unreadable; treating as empty",
                extra={"path": str(self._path), "error": str(exc)},
            )
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning(
                "Session file is not valid JSON; treating as empty",
                extra={"path": str(self._path), "error": str(exc)},
            )
            return {}

        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_items(self, items: Dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=".session-", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(items, fh, ensure_ascii=False, sort_keys=True)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise SessionStoreError(
                f"Could not write session file {self._path}", original_error=exc
            ) from exc

    # =========================================================
    # SessionStore
    # =========================================================
    def save(self, session: Session) -> None:
        items = self._read_items()
        items[self._user_key] = dump_user(session.user)
        items[self._token_key] = session.token
        self._write_items(items)

    def load(self) -> Optional[Session]:
        items = self._read_items()
        return decode_session(items.get(self._user_key), items.get(self._token_key))

    def clear(self) -> None:
        items = self._read_items()
        if self._user_key not in items and self._token_key not in items:
            return
        items.pop(self._user_key, None)
        items.pop(self._token_key, None)
        self._write_items(items)
