from datetime import timedelta, timezone

import pytest

from incident_logger.render.formatting import escape_html, format_created_at, format_date, format_time


@pytest.mark.parametrize("raw, expected", [
    ("2026-10-18", "Oct 18, 2026"),
    ("2026-02-03", "Feb 3, 2026"),
    ("not a date", "not a date"),
    ("", ""),
])
def test_format_date(raw: str, expected: str) -> None:
    assert format_date(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("14:05", "2:05 PM"),
    ("09:05", "9:05 AM"),
    ("00:30", "12:30 AM"),
    ("12:00", "12:00 PM"),
    ("noon", "noon"),
])
def test_format_time(raw: str, expected: str) -> None:
    assert format_time(raw) == expected


def test_format_created_at_in_utc() -> None:
    assert format_created_at("2026-10-18T14:05:09.120Z", tz=timezone.utc) == "10/18/2026, 2:05:09 PM"


def test_format_created_at_converts_zone() -> None:
    tz = timezone(timedelta(hours=-5))

    assert format_created_at("2026-01-01T03:00:00.000Z", tz=tz) == "12/31/2025, 10:00:00 PM"


def test_format_created_at_unparseable_returns_input() -> None:
    assert format_created_at("yesterday") == "yesterday"


def test_escape_html() -> None:
    assert escape_html(None) == ""
    assert escape_html("") == ""
    assert escape_html('<b>"Tom" & \'Jerry\'</b>') == "&lt;b&gt;&quot;Tom&quot; &amp; &#x27;Jerry&#x27;&lt;/b&gt;"
