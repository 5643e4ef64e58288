from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from incident_logger.domain.models import SEVERITY_LABELS, Incident, injury_type_label, severity_label
from incident_logger.render.formatting import escape_html, format_created_at, format_date, format_time

logger = logging.getLogger(__name__)

EMPTY_LIST_HTML = '<p class="no-incidents">No incidents logged yet.</p>'

PAGE_STYLE = """
body { font-family: system-ui, sans-serif; margin: 2rem; color: #222; }
.incident-card { border-left: 6px solid #999; padding: .75rem 1rem; margin-bottom: 1rem; background: #fafafa; }
.incident-card.severity-minor { border-color: #4caf50; }
.incident-card.severity-moderate { border-color: #ff9800; }
.incident-card.severity-serious { border-color: #f44336; }
.incident-card.severity-critical { border-color: #8b0000; }
.incident-card.severity-near-miss { border-color: #2196f3; }
.incident-header { display: flex; justify-content: space-between; margin-bottom: .5rem; }
.severity-badge { padding: .1rem .5rem; border-radius: 3px; background: #eee; font-size: .85rem; }
.detail-row { display: flex; gap: 1rem; padding: .25rem 0; }
.detail-label { font-weight: bold; min-width: 9rem; }
.no-incidents { color: #777; font-style: italic; }
"""


def _datetime_text(incident: Incident) -> str:
    return f"{escape_html(format_date(incident.date))} at {escape_html(format_time(incident.time))}"


def _badge(incident: Incident) -> str:
    severity = escape_html(incident.severity)
    return (
        f'<span class="severity-badge {severity}">'
        f"{escape_html(severity_label(incident.severity))}</span>"
    )


def render_incident_card(incident: Incident) -> str:
    incident_id = escape_html(incident.incident_id)
    return (
        f'<div class="incident-card severity-{escape_html(incident.severity)}" data-id="{incident_id}">\n'
        f'  <div class="incident-header">\n'
        f'    <span class="incident-datetime">{_datetime_text(incident)}</span>\n'
        f"    {_badge(incident)}\n"
        f"  </div>\n"
        f'  <div class="incident-location"><strong>Location:</strong> {escape_html(incident.location)}</div>\n'
        f'  <div class="incident-person"><strong>Person Involved:</strong> '
        f"{escape_html(incident.person_involved)}</div>\n"
        f'  <div class="incident-description">{escape_html(incident.description)}</div>\n'
        f'  <div class="incident-actions">\n'
        f'    <a class="btn-details" href="#incident-{incident_id}">Details</a>\n'
        f'    <button class="btn-delete" type="button" data-id="{incident_id}">Delete</button>\n'
        f"  </div>\n"
        f"</div>"
    )


def render_incident_list(incidents: Sequence[Incident]) -> str:
    if not incidents:
        return EMPTY_LIST_HTML
    return "\n".join(render_incident_card(incident) for incident in incidents)


def render_incident_detail(incident: Incident) -> str:
    rows = [
        ("Date & Time", _datetime_text(incident)),
        ("Location", escape_html(incident.location)),
        ("Person Involved", escape_html(incident.person_involved)),
        ("Severity", _badge(incident)),
        ("Injury Type", escape_html(injury_type_label(incident.injury_type))),
        ("Description", escape_html(incident.description)),
        ("Witnesses", escape_html(incident.witnesses) or "None listed"),
        ("Logged On", escape_html(format_created_at(incident.created_at))),
    ]
    return "\n".join(
        '<div class="detail-row">'
        f'<div class="detail-label">{escape_html(label)}</div>'
        f'<div class="detail-value">{value}</div>'
        "</div>"
        for label, value in rows
    )


def _filter_options(selected: str) -> str:
    options = [f'<option value=""{" selected" if not selected else ""}>All severities</option>']
    for value, label in SEVERITY_LABELS.items():
        flag = " selected" if value == selected else ""
        options.append(f'<option value="{value}"{flag}>{label}</option>')
    return "".join(options)


def render_page(incidents: Sequence[Incident], severity_filter: str = "", title: str = "Incident Log") -> str:
    """
    Standalone HTML document: severity filter state, the incident list and
    one hidden detail dialog per listed incident.
    """
    dialogs = "\n".join(
        f'<dialog class="modal" id="incident-{escape_html(incident.incident_id)}">\n'
        f'<div class="modal-body">\n{render_incident_detail(incident)}\n</div>\n'
        f"</dialog>"
        for incident in incidents
    )
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{escape_html(title)}</title>\n"
        f"<style>{PAGE_STYLE}</style>\n"
        "</head>\n"
        "<body>\n"
        f"<h1>{escape_html(title)}</h1>\n"
        f'<select id="severity-filter" disabled>{_filter_options(severity_filter)}</select>\n'
        f'<div id="incident-list">\n{render_incident_list(incidents)}\n</div>\n'
        f"{dialogs}\n"
        "</body>\n"
        "</html>\n"
    )


def render_incident_line(incident: Incident) -> str:
    return (
        f"{incident.incident_id}  {format_date(incident.date)} at {format_time(incident.time)}  "
        f"[{severity_label(incident.severity)}]  {incident.location} | {incident.person_involved}"
    )


def render_incident_text(incident: Incident) -> str:
    rows = [
        ("Date & Time", f"{format_date(incident.date)} at {format_time(incident.time)}"),
        ("Location", incident.location),
        ("Person Involved", incident.person_involved),
        ("Severity", severity_label(incident.severity)),
        ("Injury Type", injury_type_label(incident.injury_type)),
        ("Description", incident.description),
        ("Witnesses", incident.witnesses or "None listed"),
        ("Logged On", format_created_at(incident.created_at)),
    ]
    width = max(len(label) for label, _ in rows)
    return "\n".join(f"{label.ljust(width)} : {value}" for label, value in rows)


def filter_by_severity(incidents: Iterable[Incident], severity: str) -> list[Incident]:
    if not severity:
        return list(incidents)
    return [incident for incident in incidents if incident.severity == severity]


class IncidentView:
    """Rendered state of the list, the severity filter and the detail modal."""

    def __init__(self, output_path: str | Path | None = None) -> None:
        self._output_path = Path(output_path) if output_path else None
        self.severity_filter = ""
        self.list_html = EMPTY_LIST_HTML
        self.modal_html = ""
        self.modal_open = False

    @property
    def output_path(self) -> Path | None:
        return self._output_path

    def render(self, incidents: Sequence[Incident]) -> str:
        visible = filter_by_severity(incidents, self.severity_filter)
        self.list_html = render_incident_list(visible)
        if self._output_path is not None:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            self._output_path.write_text(render_page(visible, self.severity_filter), encoding="utf-8")
            logger.debug("page written | path=%s incidents=%d", self._output_path, len(visible))
        return self.list_html

    def open_modal(self, body_html: str) -> None:
        self.modal_html = body_html
        self.modal_open = True

    def close_modal(self) -> None:
        self.modal_open = False
