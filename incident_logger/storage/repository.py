from __future__ import annotations

import json
import logging
from typing import Iterable

from incident_logger.domain.models import Incident
from incident_logger.storage.local_storage import LocalStorage

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "incidents"


class MalformedStorageError(ValueError):
    pass


def dumps(incidents: Iterable[Incident]) -> str:
    """Compact JSON array, same layout as JSON.stringify."""
    records = [incident.to_record() for incident in incidents]
    return json.dumps(records, ensure_ascii=False, separators=(",", ":"))


def loads(text: str) -> list[Incident]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedStorageError(f"invalid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise MalformedStorageError(f"expected a JSON array, got {type(data).__name__}")
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise MalformedStorageError(f"record #{index} is {type(item).__name__}, not an object")

    return [Incident.from_record(item) for item in data]


class IncidentRepository:
    """The whole collection lives in one storage entry and is rewritten on every save."""

    def __init__(self, storage: LocalStorage, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[Incident]:
        stored = self._storage.get_item(self._key)
        if not stored:
            return []

        try:
            incidents = loads(stored)
        except MalformedStorageError as exc:
            logger.warning("stored incidents unreadable, starting empty | key=%s error=%s", self._key, exc)
            return []

        seen: set[str] = set()
        unique: list[Incident] = []
        for incident in incidents:
            if incident.incident_id in seen:
                logger.warning("dropping duplicate stored incident | id=%s", incident.incident_id)
                continue
            seen.add(incident.incident_id)
            unique.append(incident)
        return unique

    def save(self, incidents: Iterable[Incident]) -> None:
        self._storage.set_item(self._key, dumps(incidents))
