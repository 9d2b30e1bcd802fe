"""
===============================================================================
MODULE: Structured (JSON) logger with session context
===============================================================================

Goal
----
Log lines that are:
- Parseable (one JSON object per line)
- Correlatable (session_user_id / session_role of the held Session)
- Safe (passwords, initial passwords and session tokens never printed)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Component:
  JSONFormatter + setup_logger()

Responsibilities:
  - Render LogRecords as JSON
  - Merge the session ContextVars (fieldforce/context.py)
  - Mask secret fields passed through `extra=` and cap long values

Collaborators:
  - fieldforce/context.py
  - crosscutting/config.py (log_level, log_json)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries; anything else arrived through extra=.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}

REDACTED = "***REDACTED***"


class SecretMasker:
    """
    Walk `extra` values and mask anything stored under a secret-looking key.

    Containers are walked down to `max_depth`; strings longer than
    `max_len` are cut.
    """

    SECRET_KEYS = frozenset(
        {
            "password",
            "passwd",
            "initial_password",
            "secret",
            "token",
            "session_token",
            "authorization",
            "redis_url",
        }
    )

    def __init__(self, max_len: int = 2_000, max_depth: int = 4):
        self._max_len = max_len
        self._max_depth = max_depth

    def mask(self, value: Any, key: str | None = None, depth: int = 0) -> Any:
        if key is not None and key.lower() in self.SECRET_KEYS:
            return REDACTED
        if depth > self._max_depth:
            return "<nested>"

        if isinstance(value, str):
            return value if len(value) <= self._max_len else value[: self._max_len] + "..."
        if isinstance(value, (bytes, bytearray)):
            return f"<{len(value)} bytes>"
        if isinstance(value, dict):
            return {str(k): self.mask(v, str(k), depth + 1) for k, v in value.items()}
        if isinstance(value, (list, tuple, set, frozenset)):
            return [self.mask(v, key, depth + 1) for v in value]
        if value is None or isinstance(value, (bool, int, float)):
            return value
        return str(value)


class JSONFormatter(logging.Formatter):
    """One JSON object per record: base fields, session context, extras, exception."""

    def __init__(self) -> None:
        super().__init__()
        self._masker = SecretMasker()

    def format(self, record: logging.LogRecord) -> str:
        from ..context import get_context_dict

        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "where": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        payload.update(get_context_dict())

        extras = {
            k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS
        }
        for key, value in extras.items():
            payload[key] = self._masker.mask(value, key)

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, tb = record.exc_info
            payload["exc"] = {
                "type": exc_type.__name__,
                "message": str(exc),
                "trace": "".join(traceback.format_exception(exc_type, exc, tb)),
            }

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger(name: str = "fieldforce") -> logging.Logger:
    """
    Configure and return the package logger.

    Idempotent: the stdout handler is attached only once.
    """
    from .config import get_settings

    settings = get_settings()
    log = logging.getLogger(name)
    level = logging.getLevelName((settings.log_level or "INFO").upper())
    log.setLevel(level if isinstance(level, int) else logging.INFO)

    if log.handlers:
        return log

    handler = logging.StreamHandler(sys.stdout)
    if settings.log_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    log.addHandler(handler)
    return log


logger = setup_logger()
