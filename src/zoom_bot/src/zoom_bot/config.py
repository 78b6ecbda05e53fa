"""Bot service configuration resolved from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_PORT = 3001
DEFAULT_HOST = "0.0.0.0"  # noqa: S104
FALLBACK_ROBOT_JID = "default_robot_jid"


@dataclass(frozen=True)
class BotConfig:
    """Webhook and server settings for the bot service."""

    verification_token: str | None = None
    bot_jid: str | None = None
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST

    @classmethod
    def from_env(cls) -> BotConfig:
        """Build the config from environment variables without validating them."""
        return cls(
            verification_token=os.environ.get("ZOOM_VERIFICATION_TOKEN") or None,
            bot_jid=os.environ.get("ZOOM_BOT_JID") or None,
            port=int(os.environ.get("PORT", DEFAULT_PORT)),
            host=os.environ.get("HOST", DEFAULT_HOST),
        )

    def robot_jid(self, requested: str | None = None) -> str:
        """Return the requested robot JID, else the configured one, else a placeholder."""
        return requested or self.bot_jid or FALLBACK_ROBOT_JID
