"""Client-credentials token cache for Zoom server-to-server OAuth.

A single ``TokenCache`` is owned by the process-wide chat client. It holds at
most one bearer token and reuses it until shortly before the provider-stated
expiry.

The cache is not locked. Requests that miss concurrently each run their own
exchange and whichever finishes last overwrites the cached token. Zoom accepts
redundant exchanges, so the race only costs an extra round trip.
"""

from __future__ import annotations

import base64
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

import requests

from chat_client_api import AuthError
from zoom_client_impl.responses import response_detail

if TYPE_CHECKING:
    from collections.abc import Callable

    from zoom_client_impl.settings import ZoomSettings

logger = logging.getLogger("zoom_client_impl.token_cache")

EXPIRY_BUFFER_SECONDS = 300


@dataclass(frozen=True)
class CachedToken:
    """A bearer token and the instant after which it must not be reused."""

    value: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        """Return True while ``now`` is before the buffered expiry."""
        return now < self.expires_at


class TokenCache:
    """Obtain and reuse an access token via the client-credentials grant."""

    def __init__(self, settings: ZoomSettings, *, clock: Callable[[], float] = time.time) -> None:
        """Create an empty cache bound to the given credentials."""
        self._settings = settings
        self._clock = clock
        self._token: CachedToken | None = None

    @property
    def cached(self) -> CachedToken | None:
        """Return the currently cached token, valid or not."""
        return self._token

    def get_token(self) -> str:
        """Return a valid bearer token, exchanging credentials on a cache miss.

        Raises:
            AuthError: Credentials are missing or the exchange failed. The cache
                is left untouched.

        """
        token = self._token
        if token is not None and token.is_valid(self._clock()):
            return token.value

        token = self._exchange()
        self._token = token
        logger.info("Access token acquired")
        return token.value

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    def _exchange(self) -> CachedToken:
        settings = self._settings
        if not settings.client_id or not settings.client_secret or not settings.account_id:
            msg = "ZOOM_CLIENT_ID, ZOOM_CLIENT_SECRET and ZOOM_ACCOUNT_ID are required."
            logger.error("Failed to acquire access token: %s", msg)
            raise AuthError(msg)

        basic = base64.b64encode(f"{settings.client_id}:{settings.client_secret}".encode()).decode("ascii")
        try:
            response = requests.post(
                settings.token_url,
                params={"grant_type": "client_credentials", "account_id": settings.account_id},
                headers={"Authorization": f"Basic {basic}"},
                timeout=settings.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            detail = response_detail(exc.response)
            logger.error("Failed to acquire access token: %s (detail: %s)", exc, detail)  # noqa: TRY400
            msg = f"Token exchange failed: {exc}"
            raise AuthError(msg, detail=detail) from exc
        except ValueError as exc:
            logger.error("Failed to acquire access token: response is not JSON")  # noqa: TRY400
            msg = "Token exchange returned a non-JSON body."
            raise AuthError(msg) from exc

        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        expires_in = payload.get("expires_in") if isinstance(payload, dict) else None
        if not access_token or not isinstance(expires_in, (int, float)):
            logger.error("Failed to acquire access token: unexpected payload %s", payload)
            msg = "Token exchange response is missing access_token or expires_in."
            raise AuthError(msg, detail=payload)

        now = self._clock()
        return CachedToken(value=str(access_token), expires_at=now + expires_in - EXPIRY_BUFFER_SECONDS)
