from incident_logger.config import Settings, _parse_bool, _parse_csv


def test_parse_bool_true_values(monkeypatch) -> None:
    monkeypatch.setenv("FLAG", "yes")
    assert _parse_bool("FLAG", False) is True


def test_parse_bool_default(monkeypatch) -> None:
    monkeypatch.delenv("FLAG", raising=False)
    assert _parse_bool("FLAG", True) is True


def test_parse_csv(monkeypatch) -> None:
    monkeypatch.setenv("CSV", "a, b, ,c")
    assert _parse_csv("CSV", "x") == ["a", "b", "c"]


def test_defaults(monkeypatch) -> None:
    for name in ("STORAGE_URL", "STORAGE_KEY", "VIEW_PATH", "NOTIFY_SEVERITIES", "LOG_LEVEL", "LOG_FORMAT_JSON"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.storage_url == "sqlite:///./data/incident_logger.db"
    assert settings.storage_key == "incidents"
    assert settings.view_path == ""
    assert settings.notify_severities == ["serious", "critical"]
    assert settings.log_level == "INFO"
    assert settings.json_logs is False


def test_overrides(monkeypatch) -> None:
    monkeypatch.setenv("STORAGE_KEY", "site-b")
    monkeypatch.setenv("NOTIFY_SEVERITIES", "Critical, near-miss")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT_JSON", "1")

    settings = Settings.from_env()

    assert settings.storage_key == "site-b"
    assert settings.notify_severities == ["critical", "near-miss"]
    assert settings.log_level == "DEBUG"
    assert settings.json_logs is True
