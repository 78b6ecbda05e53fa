"""End-to-end test that runs the bot with uvicorn and delivers a real Zoom chatbot message."""

from __future__ import annotations

import os
import socket
import subprocess
import sys
import time
from http import HTTPStatus
from typing import TYPE_CHECKING

import pytest
import requests

if TYPE_CHECKING:
    from collections.abc import Iterator

pytestmark = [pytest.mark.e2e, pytest.mark.local_credentials]

REQUIRED_ENV = (
    "ZOOM_CLIENT_ID",
    "ZOOM_CLIENT_SECRET",
    "ZOOM_ACCOUNT_ID",
    "ZOOM_BOT_JID",
    "ZOOM_E2E_USER_JID",
)
VERIFICATION_TOKEN = "e2e-verification-token"
HEALTH_TIMEOUT_SECONDS = 12.0
REQUEST_TIMEOUT_SECONDS = 60.0


def _require_envs(names: tuple[str, ...]) -> dict[str, str]:
    values = {name: os.environ.get(name) for name in names}
    missing = [name for name, value in values.items() if not value]
    if missing:
        pytest.skip(f"Missing e2e env vars: {', '.join(missing)}")
    return {name: value or "" for name, value in values.items()}


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return int(sock.getsockname()[1])


def _wait_for_health(base_url: str) -> None:
    deadline = time.time() + HEALTH_TIMEOUT_SECONDS
    while time.time() < deadline:
        try:
            response = requests.get(f"{base_url}/health", timeout=1.0)
            if response.status_code == HTTPStatus.OK:
                return
        except requests.RequestException:
            time.sleep(0.2)
    raise AssertionError("Bot did not become healthy in time.")  # noqa: TRY003, EM101


@pytest.fixture
def bot_url() -> Iterator[tuple[str, dict[str, str]]]:
    """Start the bot with real credentials and return its base URL and env."""
    env = _require_envs(REQUIRED_ENV)
    port = _free_port()
    base_url = f"http://127.0.0.1:{port}"
    full_env = os.environ.copy()
    full_env.update(env)
    full_env["ZOOM_VERIFICATION_TOKEN"] = VERIFICATION_TOKEN

    process = subprocess.Popen(  # noqa: S603
        [sys.executable, "-m", "uvicorn", "zoom_bot.main:app", "--host", "127.0.0.1", "--port", str(port)],
        env=full_env,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
    )
    try:
        _wait_for_health(base_url)
        yield base_url, env
    finally:
        process.terminate()
        try:
            process.wait(timeout=5)
        except subprocess.TimeoutExpired:
            process.kill()


def test_ping_is_delivered(bot_url: tuple[str, dict[str, str]]) -> None:
    """A ping webhook is answered through the real Zoom API."""
    base_url, env = bot_url
    response = requests.post(
        f"{base_url}/webhook",
        headers={"Authorization": VERIFICATION_TOKEN},
        json={
            "event": "bot_notification",
            "payload": {"cmd": "ping", "userName": "e2e", "userJid": env["ZOOM_E2E_USER_JID"], "robotJid": env["ZOOM_BOT_JID"]},
        },
        timeout=REQUEST_TIMEOUT_SECONDS,
    )

    assert response.status_code == HTTPStatus.OK
    assert "Pong!" in response.json()["message"]
