"""Public export surface for ``chat_client_api``."""

from chat_client_api.client import Client, get_client
from chat_client_api.errors import AuthError, ChatClientError, DeliveryError
from chat_client_api.models import DeliveryReceipt, OutboundMessage

__all__ = [
    "AuthError",
    "ChatClientError",
    "Client",
    "DeliveryError",
    "DeliveryReceipt",
    "OutboundMessage",
    "get_client",
]
