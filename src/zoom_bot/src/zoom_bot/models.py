"""Pydantic schemas for the webhook and test endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

BOT_NOTIFICATION = "bot_notification"


class BotNotificationPayload(BaseModel):
    """Payload of a Zoom chatbot notification."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    cmd: str | None = None
    user_name: str | None = Field(default=None, alias="userName")
    user_jid: str | None = Field(default=None, alias="userJid")
    robot_jid: str | None = Field(default=None, alias="robotJid")

    def is_complete(self) -> bool:
        """Return True when the command and both JIDs are present."""
        return bool(self.cmd and self.user_jid and self.robot_jid)


class WebhookEvent(BaseModel):
    """Inbound webhook envelope."""

    model_config = ConfigDict(extra="ignore")

    event: str | None = None
    payload: BotNotificationPayload | None = None

    def is_actionable(self) -> bool:
        """Return True for complete bot notifications."""
        return self.event == BOT_NOTIFICATION and self.payload is not None and self.payload.is_complete()


class SendMessageRequest(BaseModel):
    """Body of the manual send endpoint."""

    to_jid: str | None = None
    message: str | None = None
    robot_jid: str | None = None


class SendMessageReply(BaseModel):
    """Result of the manual send endpoint."""

    status: str
    message: str
    data: dict[str, Any] | None = None
    error: str | None = None
