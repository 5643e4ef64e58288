from __future__ import annotations

from dataclasses import dataclass
from typing import Any

SEVERITY_LABELS: dict[str, str] = {
    "minor": "Minor",
    "moderate": "Moderate",
    "serious": "Serious",
    "critical": "Critical",
    "near-miss": "Near Miss",
}

INJURY_TYPE_LABELS: dict[str, str] = {
    "none": "No Injury",
    "cut": "Cut / Laceration",
    "bruise": "Bruise / Contusion",
    "sprain": "Sprain / Strain",
    "fracture": "Fracture",
    "burn": "Burn",
    "chemical": "Chemical Exposure",
    "eye": "Eye Injury",
    "respiratory": "Respiratory Issue",
    "electric": "Electric Shock",
    "other": "Other",
}

# field name -> persisted JSON key, in persisted order
RECORD_KEYS: tuple[tuple[str, str], ...] = (
    ("incident_id", "id"),
    ("date", "date"),
    ("time", "time"),
    ("location", "location"),
    ("description", "description"),
    ("injury_type", "injuryType"),
    ("severity", "severity"),
    ("person_involved", "personInvolved"),
    ("witnesses", "witnesses"),
    ("created_at", "createdAt"),
)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class Incident:
    incident_id: str
    date: str
    time: str
    location: str
    description: str
    injury_type: str
    severity: str
    person_involved: str
    witnesses: str
    created_at: str

    def to_record(self) -> dict[str, str]:
        return {key: getattr(self, attr) for attr, key in RECORD_KEYS}

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Incident":
        return cls(**{attr: _as_text(record.get(key)) for attr, key in RECORD_KEYS})


def severity_label(severity: str) -> str:
    return SEVERITY_LABELS.get(severity, severity)


def injury_type_label(injury_type: str) -> str:
    if not injury_type:
        return "Not specified"
    return INJURY_TYPE_LABELS.get(injury_type, injury_type)
