"""Structured Logging — one JSON object per log line, or plain text for local runs.

Invariants:
    - Every line has timestamp, level, logger and message
    - Journal extras (entry_id, error_code, operation, path, page_size) appear
      only when the call site passed them; unknown extras are dropped
    - Only one handler installed by setup_logging is ever attached to the root logger

Design Decisions:
    - Standard logging plus a small Formatter subclass; no logging library
    - LOG_FORMAT=text switches to a human-readable line for development and tests
"""

import json
import logging
from datetime import datetime, timezone

JOURNAL_LOG_FIELDS = ("entry_id", "error_code", "operation", "path", "page_size")
TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (name, getattr(record, name))
            for name in JOURNAL_LOG_FIELDS
            if getattr(record, name, None) is not None
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


_installed: logging.Handler | None = None


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Attach a stream handler to the root logger, replacing our previous one."""
    global _installed
    handler = logging.StreamHandler()
    formatter = JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    if _installed is not None:
        root.removeHandler(_installed)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _installed = handler
    return handler
