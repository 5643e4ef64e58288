from __future__ import annotations

import logging
from typing import Iterable

import httpx

from incident_logger.domain.models import Incident, injury_type_label, severity_label
from incident_logger.render.formatting import format_date, format_time

logger = logging.getLogger(__name__)

# Telegram rejects messages longer than this
MAX_MESSAGE_LENGTH = 4096


def build_incident_message(incident: Incident) -> str:
    lines = [
        f"⚠️ {severity_label(incident.severity)} incident logged",
        f"When: {format_date(incident.date)} at {format_time(incident.time)}",
        f"Where: {incident.location}",
        f"Person involved: {incident.person_involved}",
        f"Injury: {injury_type_label(incident.injury_type)}",
        "",
        incident.description,
    ]
    if incident.witnesses:
        lines += ["", f"Witnesses: {incident.witnesses}"]
    text = "\n".join(lines)
    if len(text) > MAX_MESSAGE_LENGTH:
        text = text[: MAX_MESSAGE_LENGTH - 3] + "..."
    return text


class TelegramNotifier:
    def __init__(self, bot_token: str, chat_id: str, severities: Iterable[str] = ()) -> None:
        self._bot_token = bot_token
        self._chat_id = chat_id
        self._severities = frozenset(severities)

    @property
    def enabled(self) -> bool:
        return bool(self._bot_token and self._chat_id)

    def notify_incident(self, incident: Incident) -> bool:
        if not self.enabled:
            logger.debug("notification skipped, telegram not configured | id=%s", incident.incident_id)
            return False
        if incident.severity not in self._severities:
            logger.debug(
                "notification skipped by severity | id=%s severity=%s",
                incident.incident_id,
                incident.severity,
            )
            return False

        self._send_text(self._chat_id, build_incident_message(incident))
        logger.info("notification sent | id=%s chat_id=%s", incident.incident_id, self._chat_id)
        return True

    def _send_text(self, chat_id: str, text: str) -> None:
        url = f"https://api.telegram.org/bot{self._bot_token}/sendMessage"
        payload = {
            "chat_id": chat_id,
            "text": text,
            "disable_web_page_preview": True,
        }

        with httpx.Client(timeout=20.0) as client:
            response = client.post(url, json=payload)

        if response.is_success:
            return

        details = self._extract_telegram_error(response)
        raise RuntimeError(
            f"Telegram sendMessage failed. "
            f"status={response.status_code}; chat_id={chat_id}; details={details}"
        )

    @staticmethod
    def _extract_telegram_error(response: httpx.Response) -> str:
        try:
            data = response.json()
            description = data.get("description")
            if description:
                return str(description)
        except Exception:  # noqa: BLE001
            pass
        text = response.text.strip()
        return text if text else "unknown error"
