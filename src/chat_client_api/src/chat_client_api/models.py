"""Schemas exchanged between the bot service and chat client implementations."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

__all__ = ["DeliveryReceipt", "OutboundMessage"]


class OutboundMessage(BaseModel):
    """A reply addressed to a chat user on behalf of a bot."""

    to_jid: str
    message: str
    robot_jid: str


class DeliveryReceipt(BaseModel):
    """Decoded response body returned by the platform for a send."""

    data: dict[str, Any] = Field(default_factory=dict)
