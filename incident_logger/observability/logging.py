from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone

# LogRecord attributes that are not user-supplied extra= fields
_RESERVED_FIELDS = frozenset({
    "name", "msg", "args", "levelname", "levelno", "pathname",
    "filename", "module", "exc_info", "exc_text", "stack_info",
    "lineno", "funcName", "created", "msecs", "relativeCreated",
    "thread", "threadName", "processName", "process", "message",
    "taskName",
})


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line.

    Example:
    {"ts":"2026-10-18T10:00:00Z","level":"INFO","logger":"incident_logger","msg":"incident logged","incident_id":"mgw1k2x9abc"}
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        for key, val in record.__dict__.items():
            if key not in _RESERVED_FIELDS and not key.startswith("_"):
                payload[key] = val

        if record.exc_info:
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=str)


def setup_logging(level: str = "INFO", json_logs: bool | None = None) -> None:
    """
    Args:
        level: INFO, DEBUG, WARNING, ERROR
        json_logs: True = JSON lines, False = plain text,
                   None = JSON when LOG_FORMAT=json
    """
    if json_logs is None:
        json_logs = os.getenv("LOG_FORMAT", "").lower() == "json"

    # stdout carries command output; logs go to stderr
    handler = logging.StreamHandler(sys.stderr)

    if json_logs:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    root.handlers.clear()
    root.addHandler(handler)
