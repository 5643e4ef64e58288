from __future__ import annotations

import secrets
from datetime import datetime, timezone
from typing import Any, Collection

from incident_logger.domain.errors import SubmissionError
from incident_logger.domain.models import INJURY_TYPE_LABELS, SEVERITY_LABELS, Incident

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_RANDOM_SUFFIX_LENGTH = 11

DATE_FMT = "%Y-%m-%d"
TIME_FMT = "%H:%M"

# form field -> snake_case alias accepted from programmatic callers
_FIELD_ALIASES = {
    "injuryType": "injury_type",
    "personInvolved": "person_involved",
}

REQUIRED_FIELDS = (
    "date",
    "time",
    "location",
    "description",
    "injuryType",
    "severity",
    "personInvolved",
)


def _safe_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_incident_id(now: datetime | None = None, existing: Collection[str] = ()) -> str:
    """
    Millisecond timestamp in base 36 plus a random base-36 tail.
    The tail is redrawn until the id is unused within ``existing``.
    """
    moment = now or _utc_now()
    prefix = _to_base36(int(moment.timestamp() * 1000))
    while True:
        suffix = "".join(secrets.choice(_BASE36) for _ in range(_RANDOM_SUFFIX_LENGTH))
        candidate = prefix + suffix
        if candidate not in existing:
            return candidate


def iso_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with milliseconds and a trailing Z."""
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def default_form_values(now: datetime | None = None) -> dict[str, str]:
    moment = now or datetime.now()
    return {"date": moment.strftime(DATE_FMT), "time": moment.strftime(TIME_FMT)}


def _field(raw: dict[str, Any], name: str) -> str:
    if name in raw:
        return _safe_text(raw.get(name))
    return _safe_text(raw.get(_FIELD_ALIASES.get(name, name)))


def _is_valid(value: str, fmt: str) -> bool:
    try:
        datetime.strptime(value, fmt)
    except ValueError:
        return False
    return True


def normalize_submission(
    raw: dict[str, Any],
    now: datetime | None = None,
    existing_ids: Collection[str] = (),
) -> Incident:
    values = {name: _field(raw, name) for name in REQUIRED_FIELDS}
    witnesses = _field(raw, "witnesses")

    errors: dict[str, str] = {}
    for name in REQUIRED_FIELDS:
        if not values[name]:
            errors[name] = "this field is required"

    # strptime accepts unpadded fields like "9:5"; form inputs always zero-pad
    if values["date"] and (len(values["date"]) != 10 or not _is_valid(values["date"], DATE_FMT)):
        errors["date"] = "expected a date as YYYY-MM-DD"
    if values["time"] and (len(values["time"]) != 5 or not _is_valid(values["time"], TIME_FMT)):
        errors["time"] = "expected a time as HH:MM"
    if values["severity"] and values["severity"] not in SEVERITY_LABELS:
        errors["severity"] = f"must be one of: {', '.join(SEVERITY_LABELS)}"
    if values["injuryType"] and values["injuryType"] not in INJURY_TYPE_LABELS:
        errors["injuryType"] = f"must be one of: {', '.join(INJURY_TYPE_LABELS)}"

    if errors:
        raise SubmissionError(errors)

    moment = now or _utc_now()
    return Incident(
        incident_id=generate_incident_id(moment, existing_ids),
        date=values["date"],
        time=values["time"],
        location=values["location"],
        description=values["description"],
        injury_type=values["injuryType"],
        severity=values["severity"],
        person_involved=values["personInvolved"],
        witnesses=witnesses,
        created_at=iso_timestamp(moment),
    )
