from __future__ import annotations

from incident_logger.domain.models import Incident


def make_incident(incident_id: str = "inc001", **overrides: str) -> Incident:
    fields = {
        "incident_id": incident_id,
        "date": "2026-10-18",
        "time": "14:05",
        "location": "Loading bay 3",
        "description": "Slipped on wet floor near the roller door",
        "injury_type": "sprain",
        "severity": "moderate",
        "person_involved": "J. Doe",
        "witnesses": "A. Smith",
        "created_at": "2026-10-18T14:07:12.345Z",
    }
    fields.update(overrides)
    return Incident(**fields)


def form_data(**overrides: str) -> dict[str, str]:
    data = {
        "date": "2026-10-18",
        "time": "09:30",
        "location": "Warehouse aisle 4",
        "description": "Box fell from top shelf",
        "injuryType": "bruise",
        "severity": "minor",
        "personInvolved": "R. Patel",
        "witnesses": "",
    }
    data.update(overrides)
    return data
