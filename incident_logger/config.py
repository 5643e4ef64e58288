from __future__ import annotations

import os
from dataclasses import dataclass


def _parse_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _parse_csv(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    items = [part.strip() for part in raw.split(",")]
    return [item for item in items if item]


@dataclass(frozen=True)
class Settings:
    storage_url: str
    storage_key: str
    view_path: str                   # page re-rendered after every change; empty = off
    telegram_bot_token: str
    telegram_chat_id: str
    notify_severities: list[str]
    log_level: str
    json_logs: bool

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            storage_url=os.getenv("STORAGE_URL", "sqlite:///./data/incident_logger.db"),
            storage_key=os.getenv("STORAGE_KEY", "incidents"),
            view_path=os.getenv("VIEW_PATH", ""),
            telegram_bot_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
            telegram_chat_id=os.getenv("TELEGRAM_CHAT_ID", ""),
            notify_severities=[s.lower() for s in _parse_csv("NOTIFY_SEVERITIES", "serious,critical")],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            json_logs=_parse_bool("LOG_FORMAT_JSON", False),
        )
