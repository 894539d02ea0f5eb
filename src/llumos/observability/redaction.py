"""Logging setup with redaction of sensitive fields.

Log records may carry dicts (as ``%s`` arguments or as a ``context``
extra) with request bodies, subscriber rows or headers. Keys that look like
credentials or billing data are replaced before the record is formatted,
keeping only the value's length or type.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

SENSITIVE_FIELD_PATTERN = re.compile(
    r"(key|secret|stripe_|card|customer_id|subscription_id|token|password|auth|billing)",
    re.IGNORECASE,
)
MAX_DEPTH = 10

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def redact_sensitive_fields(obj: Any, depth: int = 0) -> Any:
    """Return a copy of *obj* with sensitive keys redacted, recursively."""
    if depth > MAX_DEPTH:
        return "[MAX_DEPTH_REACHED]"

    if isinstance(obj, dict):
        redacted: dict[Any, Any] = {}
        for key, value in obj.items():
            if isinstance(key, str) and SENSITIVE_FIELD_PATTERN.search(key):
                redacted[key] = _redact_value(value)
            else:
                redacted[key] = redact_sensitive_fields(value, depth + 1)
        return redacted

    if isinstance(obj, (list, tuple)):
        return [redact_sensitive_fields(item, depth + 1) for item in obj]

    return obj


def _redact_value(value: Any) -> str:
    if isinstance(value, str):
        return f"[REDACTED:{len(value)}chars]" if value else "[REDACTED:empty]"
    return f"[REDACTED:{type(value).__name__}]"


class RedactingFilter(logging.Filter):
    """Redacts dict arguments and the ``context`` extra of each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.args, dict):
            record.args = redact_sensitive_fields(record.args)
        elif isinstance(record.args, tuple):
            record.args = tuple(
                redact_sensitive_fields(arg) if isinstance(arg, dict) else arg
                for arg in record.args
            )
        context = getattr(record, "context", None)
        if isinstance(context, dict):
            record.context = redact_sensitive_fields(context)
        return True


def configure_logging(level: str | int = "INFO") -> logging.Handler:
    """Install a redacting stderr handler on the ``llumos`` and ``edge`` loggers.

    Safe to call more than once; the handler is only added the first time.
    """
    if isinstance(level, str):
        level = level.strip().upper()
    handler: logging.Handler | None = None
    for name in ("llumos", "edge"):
        log = logging.getLogger(name)
        log.setLevel(level)
        existing = [h for h in log.handlers if getattr(h, "_llumos_handler", False)]
        if existing:
            handler = existing[0]
            continue
        if handler is None:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            handler.addFilter(RedactingFilter())
            handler._llumos_handler = True  # type: ignore[attr-defined]
        log.addHandler(handler)
    assert handler is not None
    return handler
