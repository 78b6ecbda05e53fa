"""Inbound Zoom chatbot webhook handling.

One pass per request: authenticate the shared verification token, parse the
envelope, compute the reply and deliver it. Failures are turned into a
``WebhookResult`` here so the route only has to serialize it.
"""

from __future__ import annotations

import asyncio
import hmac
import json
import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from zoom_bot.commands import DEFAULT_USER_NAME, process_command
from zoom_bot.models import WebhookEvent

if TYPE_CHECKING:
    from chat_client_api import Client

logger = logging.getLogger("zoom_bot.webhook")

UNAUTHORIZED_MESSAGE = "未授权访问"
EVENT_RECEIVED_MESSAGE = "事件已接收"
SERVER_ERROR_MESSAGE = "服务器内部错误"


@dataclass(frozen=True)
class WebhookResult:
    """HTTP status and JSON body produced for a webhook call."""

    status_code: int
    content: dict[str, Any]


def is_authorized(authorization: str | None, verification_token: str | None) -> bool:
    """Compare the caller's Authorization header with the configured token."""
    if not authorization or not verification_token:
        return False
    return hmac.compare_digest(authorization.encode(), verification_token.encode())


def parse_event(raw: object) -> WebhookEvent | None:
    """Validate a decoded body as an event envelope; malformed shapes yield None."""
    if not isinstance(raw, dict):
        return None
    try:
        return WebhookEvent.model_validate(raw)
    except ValidationError as exc:
        logger.info("Malformed webhook event: %s", exc.errors(include_url=False))
        return None


async def handle_webhook(
    authorization: str | None,
    body: bytes,
    *,
    verification_token: str | None,
    client: Client,
    default_user_name: str = DEFAULT_USER_NAME,
) -> WebhookResult:
    """Authenticate, parse and dispatch one webhook call.

    Args:
        authorization: Raw ``Authorization`` header sent by the caller.
        body: Raw request body.
        verification_token: Configured shared secret.
        client: Chat client used to deliver the reply.
        default_user_name: Display name used when the payload has none.

    Returns:
        401 on token mismatch, 200 with the sent triple on dispatch, 200 with a
        generic acknowledgement for non-actionable or malformed events, 500 on
        undecodable bodies and delivery failures.

    """
    if not is_authorized(authorization, verification_token):
        logger.warning("Verification token mismatch")
        return WebhookResult(HTTPStatus.UNAUTHORIZED, {"error": UNAUTHORIZED_MESSAGE})

    try:
        raw = json.loads(body or b"{}")
        logger.info("Webhook received: %s", raw)
        event = parse_event(raw)

        if event is None or not event.is_actionable():
            logger.info("Ignoring non-bot, incomplete or malformed event")
            return WebhookResult(HTTPStatus.OK, {"status": "ok", "message": EVENT_RECEIVED_MESSAGE})

        payload = event.payload
        assert payload is not None
        assert payload.cmd is not None
        assert payload.user_jid is not None
        assert payload.robot_jid is not None

        reply = process_command(payload.cmd, payload.user_name or default_user_name)
        await asyncio.to_thread(client.send_message, payload.user_jid, reply, payload.robot_jid)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Webhook processing failed")
        return WebhookResult(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            {"error": SERVER_ERROR_MESSAGE, "message": str(exc)},
        )

    logger.info("Command handled: %s -> %s", payload.cmd, payload.user_name)
    return WebhookResult(
        HTTPStatus.OK,
        {"to_jid": payload.user_jid, "message": reply, "robot_jid": payload.robot_jid},
    )
