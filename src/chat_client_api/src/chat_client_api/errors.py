"""Error taxonomy shared by chat client implementations."""

from __future__ import annotations

__all__ = ["AuthError", "ChatClientError", "DeliveryError"]


class ChatClientError(Exception):
    """Base class for chat client failures.

    Attributes:
        detail: Best-effort diagnostic payload from the remote service, if any.

    """

    def __init__(self, message: str, *, detail: object | None = None) -> None:
        """Store the message and optional remote detail."""
        super().__init__(message)
        self.detail = detail


class AuthError(ChatClientError):
    """The client-credentials exchange with the identity provider failed."""


class DeliveryError(ChatClientError):
    """A message could not be delivered (token acquisition or send endpoint failure)."""
