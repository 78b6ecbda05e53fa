"""Public exports for the Zoom client implementation package."""

from zoom_client_impl.settings import ZoomSettings
from zoom_client_impl.token_cache import CachedToken, TokenCache
from zoom_client_impl.zoom_impl import ZoomChatClient, build_client, register

__all__ = ["CachedToken", "TokenCache", "ZoomChatClient", "ZoomSettings", "build_client", "register"]

register()
