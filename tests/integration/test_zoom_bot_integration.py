"""Integration tests wiring the bot service to the real Zoom client over a faked transport."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any
from unittest.mock import Mock

import pytest
import requests
import zoom_bot.main as app_module
from fastapi.testclient import TestClient
from zoom_bot.config import BotConfig
from zoom_client_impl import ZoomSettings, build_client

import chat_client_api

pytestmark = pytest.mark.integration

TOKEN_URL = "https://zoom.example/oauth/token"
API_BASE_URL = "https://api.zoom.example/v2"
MESSAGES_URL = f"{API_BASE_URL}/im/chat/messages"


class FakeZoom:
    """Records outbound calls and answers like the Zoom token and chat endpoints."""

    def __init__(self) -> None:
        self.token_calls: list[dict[str, Any]] = []
        self.message_calls: list[dict[str, Any]] = []
        self.fail_token = False

    def post(self, url: str, **kwargs: Any) -> Mock:  # noqa: ANN401
        response = Mock()
        response.raise_for_status = Mock()
        if url == TOKEN_URL:
            self.token_calls.append(kwargs)
            if self.fail_token:
                error_response = Mock()
                error_response.json.return_value = {"reason": "Invalid client_id or client_secret"}
                response.raise_for_status.side_effect = requests.HTTPError("400 Client Error", response=error_response)
            response.json.return_value = {"access_token": f"tok-{len(self.token_calls)}", "expires_in": 3600}
            return response
        if url == MESSAGES_URL:
            self.message_calls.append(kwargs)
            response.content = b'{"message_id": "m1"}'
            response.json.return_value = {"message_id": "m1"}
            return response
        raise AssertionError(f"Unexpected URL {url}")  # noqa: TRY003, EM102


@pytest.fixture
def fake_zoom(monkeypatch: pytest.MonkeyPatch) -> FakeZoom:
    """Install a fake transport and a fresh Zoom client into the app."""
    fake = FakeZoom()
    monkeypatch.setattr(requests, "post", fake.post)
    settings = ZoomSettings(
        client_id="cid",
        client_secret="csecret",
        account_id="acct",
        token_url=TOKEN_URL,
        api_base_url=API_BASE_URL,
    )
    client = build_client(settings)
    monkeypatch.setattr(app_module, "get_client", lambda: client)
    monkeypatch.setattr(app_module, "CONFIG", BotConfig(verification_token="verify", bot_jid="bot@xmpp.zoom.us"))
    return fake


def _notify(http: TestClient, cmd: str) -> Any:  # noqa: ANN401
    return http.post(
        "/webhook",
        headers={"Authorization": "verify"},
        json={
            "event": "bot_notification",
            "payload": {"cmd": cmd, "userName": "Alice", "userJid": "alice@xmpp.zoom.us", "robotJid": "bot@xmpp.zoom.us"},
        },
    )


@pytest.mark.circleci
def test_commands_share_one_token(fake_zoom: FakeZoom) -> None:
    """Consecutive webhooks reuse the cached token and send one message each."""
    http = TestClient(app_module.app)

    first = _notify(http, "hello")
    second = _notify(http, "ping")

    assert first.status_code == HTTPStatus.OK
    assert second.status_code == HTTPStatus.OK
    assert len(fake_zoom.token_calls) == 1
    assert fake_zoom.token_calls[0]["params"] == {"grant_type": "client_credentials", "account_id": "acct"}
    assert len(fake_zoom.message_calls) == 2
    assert fake_zoom.message_calls[0]["headers"]["Authorization"] == "Bearer tok-1"
    assert fake_zoom.message_calls[1]["json"] == {
        "to_jid": "alice@xmpp.zoom.us",
        "message": second.json()["message"],
        "robot_jid": "bot@xmpp.zoom.us",
    }


@pytest.mark.circleci
def test_token_failure_reported_as_server_error(fake_zoom: FakeZoom) -> None:
    """A failed credential exchange yields 500 and no message is sent."""
    fake_zoom.fail_token = True
    http = TestClient(app_module.app)

    resp = _notify(http, "help")

    assert resp.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert "Token exchange failed" in resp.json()["message"]
    assert fake_zoom.message_calls == []


@pytest.mark.circleci
def test_manual_send_goes_through_zoom_client(fake_zoom: FakeZoom) -> None:
    """The manual send endpoint delivers through the same client and token."""
    http = TestClient(app_module.app)

    resp = http.post("/test-send-message", json={"to_jid": "alice@xmpp.zoom.us", "message": "hi"})

    assert resp.status_code == HTTPStatus.OK
    assert resp.json()["data"] == {"message_id": "m1"}
    assert fake_zoom.message_calls[0]["json"]["robot_jid"] == "bot@xmpp.zoom.us"


@pytest.mark.circleci
def test_zoom_client_registered_on_import() -> None:
    """Importing the service registers the Zoom implementation."""
    from zoom_client_impl.zoom_impl import get_client_impl

    assert chat_client_api.get_client is get_client_impl
