"""FastAPI service for the Zoom Team Chat command bot.

Receives chatbot webhooks, answers commands through the Zoom client, and
exposes health, manual-send, OAuth callback and test console endpoints.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from http import HTTPStatus
from typing import TYPE_CHECKING, Any

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse

import zoom_client_impl  # noqa: F401  # ensure the Zoom implementation registers itself
from chat_client_api import DeliveryError, get_client
from zoom_bot import pages
from zoom_bot.commands import process_uptime
from zoom_bot.config import BotConfig
from zoom_bot.models import SendMessageReply, SendMessageRequest
from zoom_bot.webhook import handle_webhook
from zoom_client_impl import ZoomSettings

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

load_dotenv()

logging.basicConfig(level=logging.INFO, format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger("zoom_bot")

CONFIG = BotConfig.from_env()
CONFIGURED = "已配置"
NOT_CONFIGURED = "未配置"


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Log the service endpoints on startup and the shutdown signal on exit."""
    base = f"http://localhost:{CONFIG.port}"
    logger.info("🚀 Zoom chat bot started")
    logger.info("Webhook: %s/webhook", base)
    logger.info("Test console: %s/test", base)
    logger.info("Health check: %s/health", base)
    yield
    logger.info("Shutdown requested, stopping server...")


app = FastAPI(title="Zoom Chat Bot", version="1.0.0", lifespan=lifespan)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.post("/webhook")
async def webhook(request: Request) -> JSONResponse:
    """Handle a Zoom chatbot notification."""
    result = await handle_webhook(
        request.headers.get("authorization"),
        await request.body(),
        verification_token=CONFIG.verification_token,
        client=get_client(),
    )
    return JSONResponse(result.content, status_code=result.status_code)


@app.get("/health")
async def health() -> dict[str, Any]:
    """Return service status and which settings are present."""
    settings = ZoomSettings.from_env()
    return {
        "status": "running",
        "timestamp": datetime.now(UTC).isoformat(),
        "uptime": process_uptime(),
        "config": {
            "port": CONFIG.port,
            "clientId": _configured(settings.client_id),
            "clientSecret": _configured(settings.client_secret),
            "verificationToken": _configured(CONFIG.verification_token),
            "accountId": _configured(settings.account_id),
        },
        "message": "🤖 Zoom聊天机器人运行正常",
    }


@app.post("/test-send-message", response_model=None)
async def send_test_message(body: SendMessageRequest) -> JSONResponse | SendMessageReply:
    """Send a message directly, bypassing the webhook."""
    if not body.to_jid or not body.message:
        return JSONResponse(
            {"error": "缺少必要参数", "required": ["to_jid", "message"]},
            status_code=HTTPStatus.BAD_REQUEST,
        )
    robot_jid = CONFIG.robot_jid(body.robot_jid)
    try:
        receipt = await asyncio.to_thread(get_client().send_message, body.to_jid, body.message, robot_jid)
    except DeliveryError as exc:
        reply = SendMessageReply(status="error", message="消息发送失败", error=str(exc))
        return JSONResponse(reply.model_dump(exclude_none=True), status_code=HTTPStatus.INTERNAL_SERVER_ERROR)
    return SendMessageReply(status="success", message="消息发送成功", data=receipt.data)


@app.get("/oauth/callback", response_class=HTMLResponse)
async def oauth_callback(code: str | None = None, state: str | None = None) -> HTMLResponse:
    """Confirm the app installation after Zoom redirects back with an auth code."""
    logger.info("OAuth callback: code=%s, state=%s", "provided" if code else "missing", state)
    if not code:
        return HTMLResponse(pages.OAUTH_FAILURE_PAGE, status_code=HTTPStatus.BAD_REQUEST)
    return HTMLResponse(pages.OAUTH_SUCCESS_PAGE)


@app.get("/test", response_class=HTMLResponse)
async def console_page() -> HTMLResponse:
    """Serve the manual test console."""
    return HTMLResponse(pages.render_test_console(CONFIG.verification_token))


@app.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    """Serve the landing page."""
    return HTMLResponse(pages.INDEX_PAGE)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _configured(value: str | None) -> str:
    """Report whether a setting is present without echoing it."""
    return CONFIGURED if value else NOT_CONFIGURED


def main() -> None:
    """Run the bot service with uvicorn."""
    uvicorn.run(app, host=CONFIG.host, port=CONFIG.port)


if __name__ == "__main__":
    main()
