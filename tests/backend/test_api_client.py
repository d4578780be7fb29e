from __future__ import annotations

import pytest
import requests

from pigeonfarm.api.client import MessageEndpointClient


class DummyResponse:
    def __init__(self, payload=None, status_code: int = 200, body_error: bool = False) -> None:
        self._payload = payload
        self.status_code = status_code
        self._body_error = body_error

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._body_error:
            raise ValueError("Expecting value: line 1 column 1")
        return self._payload


@pytest.fixture
def client() -> MessageEndpointClient:
    return MessageEndpointClient(timeout_seconds=5)


def test_fetch_message_parses_payload(monkeypatch: pytest.MonkeyPatch, client: MessageEndpointClient) -> None:
    buttons = [{"title": "OK"}, {"title": "Open", "action": "url", "url": "https://example.com", "extra": [1, 2]}]

    def fake_get(url: str, timeout: float) -> DummyResponse:
        assert url == "https://example.com/news.json"
        assert timeout == 5
        return DummyResponse({"id": 7, "title": "News", "message": "Hello", "buttons": buttons})

    monkeypatch.setattr(requests, "get", fake_get)

    message = client.fetch_message("https://example.com/news.json")

    assert message is not None
    assert message.id == 7
    assert message.title == "News"
    assert message.text == "Hello"
    assert list(message.buttons) == buttons
    assert message.button_titles() == ["OK", "Open"]


def test_fetch_message_returns_none_on_network_error(
    monkeypatch: pytest.MonkeyPatch, client: MessageEndpointClient
) -> None:
    def fake_get(url: str, timeout: float) -> None:
        raise requests.ConnectionError("dns failure")

    monkeypatch.setattr(requests, "get", fake_get)

    assert client.fetch_message("https://example.com/news.json") is None


def test_fetch_message_returns_none_on_http_error(
    monkeypatch: pytest.MonkeyPatch, client: MessageEndpointClient
) -> None:
    monkeypatch.setattr(requests, "get", lambda url, timeout: DummyResponse({"id": 1, "message": "x"}, 503))

    assert client.fetch_message("https://example.com/news.json") is None


def test_fetch_message_returns_none_on_malformed_json(
    monkeypatch: pytest.MonkeyPatch, client: MessageEndpointClient
) -> None:
    monkeypatch.setattr(requests, "get", lambda url, timeout: DummyResponse(body_error=True))

    assert client.fetch_message("https://example.com/news.json") is None


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"message": "no id"},
        {"id": True, "message": "bool id"},
        {"id": "abc", "message": "bad id"},
        {"id": 3},
        {"id": 3, "message": "x", "buttons": "OK"},
        {"id": 3, "message": "x", "buttons": ["OK"]},
    ],
)
def test_parse_message_rejects_invalid_payloads(payload) -> None:
    assert MessageEndpointClient.parse_message(payload) is None


def test_parse_message_accepts_text_field_and_string_id() -> None:
    message = MessageEndpointClient.parse_message({"id": "12", "text": "Hi"})

    assert message is not None
    assert message.id == 12
    assert message.text == "Hi"
    assert message.title is None
    assert message.buttons == ()


def test_fetch_message_reports_undecodable_body_as_parse_failure(
    monkeypatch: pytest.MonkeyPatch, client: MessageEndpointClient, caplog: pytest.LogCaptureFixture
) -> None:
    class UndecodableResponse(DummyResponse):
        def json(self):
            raise requests.JSONDecodeError("Expecting value", "<html>", 0)

    monkeypatch.setattr(requests, "get", lambda url, timeout: UndecodableResponse())
    caplog.set_level("INFO", logger="pigeonfarm.api.client")

    assert client.fetch_message("https://example.com/news.json") is None

    assert "could not be parsed" in caplog.text
    assert "Failure loading message" not in caplog.text
