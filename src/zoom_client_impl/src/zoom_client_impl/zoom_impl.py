"""Zoom Team Chat client implementation.

Concrete chat_client_api.Client that posts chatbot messages to Zoom's
``/im/chat/messages`` endpoint, authenticating with a bearer token from the
shared ``TokenCache``.
"""

from __future__ import annotations

import logging

import requests

import chat_client_api
from chat_client_api import AuthError, Client, DeliveryError, DeliveryReceipt, OutboundMessage
from zoom_client_impl.responses import json_body, response_detail
from zoom_client_impl.settings import ZoomSettings
from zoom_client_impl.token_cache import TokenCache

logger = logging.getLogger("zoom_client_impl")

_DEFAULT_CLIENT: ZoomChatClient | None = None

# ---------------------------------------------------------------------------
# Client implementation
# ---------------------------------------------------------------------------


class ZoomChatClient(Client):
    """Concrete chat_client_api.Client backed by Zoom's chatbot messaging API.

    Attributes:
        token_cache: Cache supplying bearer tokens for each send.
        _messages_url: Message-send endpoint.
        _timeout: Timeout in seconds for the send request.

    """

    def __init__(self, token_cache: TokenCache, settings: ZoomSettings | None = None) -> None:
        """Bind the client to a token cache and endpoint settings."""
        settings = settings or ZoomSettings()
        self.token_cache = token_cache
        self._messages_url = settings.messages_url
        self._timeout = settings.timeout_seconds

    def send_message(self, to_jid: str, message: str, robot_jid: str) -> DeliveryReceipt:
        """Send one chatbot message; a failed attempt is not retried.

        Args:
            to_jid: Recipient JID.
            message: Message body.
            robot_jid: Bot JID the message is sent as.

        Returns:
            Receipt carrying the decoded response body.

        Raises:
            DeliveryError: Token acquisition or the send request failed.

        """
        outbound = OutboundMessage(to_jid=to_jid, message=message, robot_jid=robot_jid)
        try:
            token = self.token_cache.get_token()
        except AuthError as exc:
            logger.error("Failed to send message to %s: %s", to_jid, exc)  # noqa: TRY400
            raise DeliveryError(str(exc), detail=exc.detail) from exc

        try:
            response = requests.post(
                self._messages_url,
                json=outbound.model_dump(),
                headers={"Authorization": f"Bearer {token}", "Content-Type": "application/json"},
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            detail = response_detail(exc.response)
            logger.error("Failed to send message to %s: %s", to_jid, exc)  # noqa: TRY400
            if detail is not None:
                logger.error("Error detail: %s", detail)
            raise DeliveryError(str(exc), detail=detail) from exc

        logger.info("Message sent to %s: %s", to_jid, message)
        return DeliveryReceipt(data=json_body(response))


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def build_client(settings: ZoomSettings) -> ZoomChatClient:
    """Build a client with its own token cache."""
    return ZoomChatClient(TokenCache(settings), settings)


def get_client_impl() -> ZoomChatClient:
    """Return the process-wide ZoomChatClient, creating it from the environment on first use."""
    global _DEFAULT_CLIENT  # noqa: PLW0603
    if _DEFAULT_CLIENT is None:
        _DEFAULT_CLIENT = build_client(ZoomSettings.from_env())
    return _DEFAULT_CLIENT


def reset_client() -> None:
    """Drop the process-wide client so the next lookup re-reads the environment."""
    global _DEFAULT_CLIENT  # noqa: PLW0603
    _DEFAULT_CLIENT = None


# ---------------------------------------------------------------------------
# Factory registration
# ---------------------------------------------------------------------------


def register() -> None:
    """Bind the Zoom client factory into chat_client_api.get_client."""
    chat_client_api.get_client = get_client_impl
