from __future__ import annotations


class SubmissionError(ValueError):
    """Incident form failed validation. ``field_errors`` maps form field -> message."""

    def __init__(self, field_errors: dict[str, str]) -> None:
        self.field_errors = dict(field_errors)
        details = "; ".join(f"{name}: {message}" for name, message in self.field_errors.items())
        super().__init__(f"invalid incident submission ({details})")


class IncidentNotFoundError(KeyError):
    def __init__(self, incident_id: str) -> None:
        self.incident_id = incident_id
        super().__init__(incident_id)

    def __str__(self) -> str:
        return f"incident not found: {self.incident_id}"
