from incident_logger.domain.models import Incident, injury_type_label, severity_label

from helpers import make_incident


def test_to_record_uses_persisted_keys_in_order() -> None:
    record = make_incident().to_record()

    assert list(record) == [
        "id", "date", "time", "location", "description",
        "injuryType", "severity", "personInvolved", "witnesses", "createdAt",
    ]
    assert record["id"] == "inc001"
    assert record["injuryType"] == "sprain"
    assert record["personInvolved"] == "J. Doe"


def test_from_record_restores_incident() -> None:
    incident = make_incident()

    assert Incident.from_record(incident.to_record()) == incident


def test_from_record_fills_missing_fields_with_empty_text() -> None:
    incident = Incident.from_record({"id": "x1", "severity": "minor", "witnesses": None})

    assert incident.incident_id == "x1"
    assert incident.witnesses == ""
    assert incident.injury_type == ""
    assert incident.created_at == ""


def test_severity_label_known_and_unknown() -> None:
    assert severity_label("near-miss") == "Near Miss"
    assert severity_label("catastrophic") == "catastrophic"


def test_injury_type_label_fallbacks() -> None:
    assert injury_type_label("chemical") == "Chemical Exposure"
    assert injury_type_label("frostbite") == "frostbite"
    assert injury_type_label("") == "Not specified"
