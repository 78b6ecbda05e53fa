"""Zoom API credentials and endpoints resolved from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_TOKEN_URL = "https://zoom.us/oauth/token"
DEFAULT_API_BASE_URL = "https://api.zoom.us/v2"
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class ZoomSettings:
    """Server-to-server OAuth app settings.

    Nothing is validated here; missing credentials are reported by the token
    exchange that needs them.
    """

    client_id: str | None = None
    client_secret: str | None = None
    account_id: str | None = None
    token_url: str = DEFAULT_TOKEN_URL
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> ZoomSettings:
        """Build settings from ``ZOOM_*`` environment variables."""
        return cls(
            client_id=os.environ.get("ZOOM_CLIENT_ID") or None,
            client_secret=os.environ.get("ZOOM_CLIENT_SECRET") or None,
            account_id=os.environ.get("ZOOM_ACCOUNT_ID") or None,
            token_url=os.environ.get("ZOOM_OAUTH_TOKEN_URL", DEFAULT_TOKEN_URL),
            api_base_url=os.environ.get("ZOOM_API_BASE_URL", DEFAULT_API_BASE_URL),
            timeout_seconds=float(os.environ.get("ZOOM_HTTP_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)),
        )

    @property
    def messages_url(self) -> str:
        """Chatbot message-send endpoint."""
        return f"{self.api_base_url.rstrip('/')}/im/chat/messages"
