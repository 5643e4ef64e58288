from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from incident_logger.domain.errors import IncidentNotFoundError
from incident_logger.domain.models import Incident
from incident_logger.domain.normalizer import default_form_values, normalize_submission
from incident_logger.render.views import IncidentView, filter_by_severity, render_incident_detail
from incident_logger.storage.repository import IncidentRepository

logger = logging.getLogger(__name__)

CONFIRM_DELETE = "Are you sure you want to delete this incident?"
CONFIRM_CLEAR_ALL = "Are you sure you want to delete ALL incidents? This cannot be undone."


class Notifier(Protocol):
    def notify_incident(self, incident: Incident) -> bool: ...


def _log_toast(message: str) -> None:
    logger.info("toast: %s", message)


class IncidentLogger:
    """
    Keeps the in-memory list, the stored copy and the rendered view in step:
    every mutation rewrites storage in full and re-renders the view.
    """

    def __init__(
        self,
        repository: IncidentRepository,
        view: IncidentView,
        confirm: Callable[[str], bool],
        toast: Callable[[str], None] = _log_toast,
        notifier: Notifier | None = None,
    ) -> None:
        self._repository = repository
        self._view = view
        self._confirm = confirm
        self._toast = toast
        self._notifier = notifier
        self.incidents: list[Incident] = repository.load()
        self.render()

    @property
    def view(self) -> IncidentView:
        return self._view

    def form_defaults(self) -> dict[str, str]:
        return default_form_values()

    def _commit(self, incidents: list[Incident]) -> None:
        # storage first: a failed write leaves the in-memory list untouched
        self._repository.save(incidents)
        self.incidents = incidents
        self.render()

    def render(self) -> str:
        return self._view.render(self.incidents)

    def submit(self, raw: dict[str, Any]) -> Incident:
        existing = {incident.incident_id for incident in self.incidents}
        incident = normalize_submission(raw, existing_ids=existing)

        self._commit([incident, *self.incidents])
        logger.info(
            "incident logged | id=%s severity=%s",
            incident.incident_id,
            incident.severity,
            extra={"incident_id": incident.incident_id, "severity": incident.severity},
        )
        self._toast("Incident logged successfully")

        if self._notifier is not None:
            try:
                self._notifier.notify_incident(incident)
            except Exception as exc:  # noqa: BLE001
                logger.error(
                    "notification failed | id=%s error=%s",
                    incident.incident_id,
                    exc,
                    extra={"incident_id": incident.incident_id},
                )
        return incident

    def delete_incident(self, incident_id: str) -> bool:
        if not any(incident.incident_id == incident_id for incident in self.incidents):
            logger.warning(
                "delete requested for unknown incident | id=%s", incident_id, extra={"incident_id": incident_id}
            )
            return False
        if not self._confirm(CONFIRM_DELETE):
            logger.info("delete cancelled | id=%s", incident_id, extra={"incident_id": incident_id})
            return False

        self._commit([incident for incident in self.incidents if incident.incident_id != incident_id])
        logger.info("incident deleted | id=%s", incident_id, extra={"incident_id": incident_id})
        self._toast("Incident deleted")
        return True

    def clear_all_incidents(self) -> bool:
        if not self._confirm(CONFIRM_CLEAR_ALL):
            logger.info("clear all cancelled")
            return False

        removed = len(self.incidents)
        self._commit([])
        logger.info("all incidents cleared | removed=%d", removed, extra={"removed": removed})
        self._toast("All incidents cleared")
        return True

    def set_severity_filter(self, severity: str | None) -> str:
        self._view.severity_filter = severity or ""
        return self.render()

    def filtered_incidents(self) -> list[Incident]:
        return filter_by_severity(self.incidents, self._view.severity_filter)

    def get_incident(self, incident_id: str) -> Incident:
        for incident in self.incidents:
            if incident.incident_id == incident_id:
                return incident
        raise IncidentNotFoundError(incident_id)

    def show_incident_details(self, incident_id: str) -> str | None:
        try:
            incident = self.get_incident(incident_id)
        except IncidentNotFoundError:
            return None
        body = render_incident_detail(incident)
        self._view.open_modal(body)
        return body

    def close_modal(self) -> None:
        self._view.close_modal()
