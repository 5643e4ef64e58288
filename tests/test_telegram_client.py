import logging

import httpx

from incident_logger.publisher.telegram_client import (
    MAX_MESSAGE_LENGTH,
    TelegramNotifier,
    build_incident_message,
)

from helpers import make_incident


class _DummyResponse:
    def __init__(self, status_code: int, json_data: dict | None = None, text: str = "") -> None:
        self.status_code = status_code
        self._json_data = json_data
        self.text = text

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> dict:
        if self._json_data is None:
            raise ValueError("no json")
        return self._json_data


class _DummyClient:
    def __init__(self, responses: list[_DummyResponse]) -> None:
        self._responses = responses
        self.calls: list[dict] = []

    def __enter__(self) -> "_DummyClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None

    def post(self, url: str, json: dict) -> _DummyResponse:  # noqa: A002
        self.calls.append({"url": url, "json": json})
        return self._responses.pop(0)


def test_notify_sends_for_configured_severity(monkeypatch) -> None:
    client = _DummyClient([_DummyResponse(200, json_data={"ok": True})])
    monkeypatch.setattr(httpx, "Client", lambda timeout: client)

    notifier = TelegramNotifier("token", "-100123", severities=["critical"])
    sent = notifier.notify_incident(make_incident(severity="critical"))

    assert sent is True
    assert len(client.calls) == 1
    assert client.calls[0]["url"] == "https://api.telegram.org/bottoken/sendMessage"
    assert client.calls[0]["json"]["chat_id"] == "-100123"
    assert "Critical incident logged" in client.calls[0]["json"]["text"]


def test_notify_skips_other_severities(monkeypatch) -> None:
    client = _DummyClient([])
    monkeypatch.setattr(httpx, "Client", lambda timeout: client)

    notifier = TelegramNotifier("token", "-100123", severities=["critical"])

    assert notifier.notify_incident(make_incident(severity="minor")) is False
    assert client.calls == []


def test_notify_skips_when_not_configured(caplog) -> None:
    notifier = TelegramNotifier("", "", severities=["minor"])

    with caplog.at_level(logging.DEBUG):
        assert notifier.notify_incident(make_incident(severity="minor")) is False

    assert "not configured" in caplog.text


def test_notify_raises_clear_error(monkeypatch) -> None:
    client = _DummyClient(
        [_DummyResponse(400, json_data={"ok": False, "description": "Bad Request: chat not found"})]
    )
    monkeypatch.setattr(httpx, "Client", lambda timeout: client)

    notifier = TelegramNotifier("token", "@bad_chat", severities=["moderate"])

    try:
        notifier.notify_incident(make_incident(severity="moderate"))
        assert False, "Expected RuntimeError"
    except RuntimeError as exc:
        message = str(exc)

    assert "status=400" in message
    assert "chat not found" in message


def test_error_falls_back_to_body_text(monkeypatch) -> None:
    client = _DummyClient([_DummyResponse(502, text="Bad Gateway")])
    monkeypatch.setattr(httpx, "Client", lambda timeout: client)

    notifier = TelegramNotifier("token", "-1", severities=["moderate"])

    try:
        notifier.notify_incident(make_incident())
        assert False, "Expected RuntimeError"
    except RuntimeError as exc:
        assert "Bad Gateway" in str(exc)


def test_message_mentions_witnesses_only_when_present() -> None:
    assert "Witnesses: A. Smith" in build_incident_message(make_incident())
    assert "Witnesses" not in build_incident_message(make_incident(witnesses=""))


def test_message_is_truncated() -> None:
    text = build_incident_message(make_incident(description="x" * 5000))

    assert len(text) == MAX_MESSAGE_LENGTH
    assert text.endswith("...")
