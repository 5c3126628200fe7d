from __future__ import annotations

import io
import json
import urllib.error
import urllib.parse
import urllib.request

import pytest

from adapters.console_notifier import ConsoleNotifier
from adapters.slack_notifier import SlackWebhookNotifier
from core.config import SlackConfig
from core.errors import SlackPostError


class DummyResponse:
    def __init__(self, body: bytes = b"ok", status: int = 200) -> None:
        self._body = body
        self.status = status
        self.closed = False

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "DummyResponse":
        return self

    def __exit__(self, *exc) -> None:
        self.closed = True


def _notifier() -> SlackWebhookNotifier:
    return SlackWebhookNotifier(
        SlackConfig(
            webhook_url="https://hooks.slack.example.com/services/T/B/X",
            channel="#dev",
            username="Backlog-bot",
            icon_emoji=":backlog:",
        )
    )


def test_post_sends_form_encoded_payload(monkeypatch) -> None:
    calls: list = []
    response = DummyResponse()

    def fake_urlopen(request, timeout):
        calls.append(request)
        return response

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    _notifier().post("hello")

    request = calls[0]
    assert request.full_url == "https://hooks.slack.example.com/services/T/B/X"
    assert request.get_method() == "POST"
    assert request.get_header("Content-type") == "application/x-www-form-urlencoded"
    form = urllib.parse.parse_qs(request.data.decode("utf-8"))
    assert list(form) == ["payload"]
    assert json.loads(form["payload"][0]) == {
        "text": "hello",
        "username": "Backlog-bot",
        "icon_emoji": ":backlog:",
        "icon_url": "",
        "channel": "#dev",
    }
    assert response.closed


def test_non_2xx_status_raises(monkeypatch) -> None:
    monkeypatch.setattr(urllib.request, "urlopen", lambda request, timeout: DummyResponse(b"moved", status=302))

    with pytest.raises(SlackPostError):
        _notifier().post("hello")


def test_http_error_raises_slack_post_error(monkeypatch) -> None:
    def fake_urlopen(request, timeout):
        raise urllib.error.HTTPError(request.full_url, 404, "Not Found", {}, io.BytesIO(b"channel_not_found"))

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(SlackPostError) as excinfo:
        _notifier().post("hello")
    assert excinfo.value.status == 404
    assert excinfo.value.body == "channel_not_found"


def test_console_notifier_writes_to_stream(monkeypatch) -> None:
    def fail_urlopen(request, timeout):
        raise AssertionError("dry run must not touch the network")

    monkeypatch.setattr(urllib.request, "urlopen", fail_urlopen)
    stream = io.StringIO()

    ConsoleNotifier(stream).post("hello")

    assert stream.getvalue() == "hello\n"
