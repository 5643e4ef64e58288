from __future__ import annotations

import html
from datetime import datetime, tzinfo

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def escape_html(text: str | None) -> str:
    if not text:
        return ""
    return html.escape(text, quote=True)


def _hour12(hour: int) -> tuple[int, str]:
    return (hour % 12 or 12), ("PM" if hour >= 12 else "AM")


def format_date(value: str) -> str:
    """'2026-10-18' -> 'Oct 18, 2026'. Unparseable input is returned as-is."""
    try:
        day = datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        return value or ""
    return f"{_MONTHS[day.month - 1]} {day.day}, {day.year}"


def format_time(value: str) -> str:
    """'14:05' -> '2:05 PM'."""
    try:
        hours, minutes = value.split(":")[:2]
        hour = int(hours)
    except (AttributeError, ValueError):
        return value or ""
    hour12, ampm = _hour12(hour)
    return f"{hour12}:{minutes} {ampm}"


def parse_timestamp(value: str) -> datetime | None:
    text = (value or "").strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_created_at(value: str, tz: tzinfo | None = None) -> str:
    """
    en-US locale rendering of a stored creation timestamp, e.g.
    '2026-10-18T14:05:09.120Z' -> '10/18/2026, 2:05:09 PM' (with tz=UTC).

    Without ``tz`` the timestamp is shown in the machine's local zone.
    """
    moment = parse_timestamp(value)
    if moment is None:
        return value or ""
    local = moment.astimezone(tz) if tz is not None else moment.astimezone()
    hour12, ampm = _hour12(local.hour)
    return (
        f"{local.month}/{local.day}/{local.year}, "
        f"{hour12}:{local.minute:02d}:{local.second:02d} {ampm}"
    )
