"""Abstract interface for chat delivery APIs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chat_client_api.models import DeliveryReceipt

__all__ = ["Client", "get_client"]


class Client(ABC):
    """The contract for services that push bot replies to a chat platform."""

    @abstractmethod
    def send_message(self, to_jid: str, message: str, robot_jid: str) -> DeliveryReceipt:
        """Deliver a single chatbot message.

        Args:
            to_jid: Addressable identifier of the recipient user or channel.
            message: Message body to deliver.
            robot_jid: Identifier of the bot the message is sent as.

        Returns:
            Receipt wrapping whatever the platform returned for the send.

        Raises:
            DeliveryError: The token could not be obtained or the platform rejected the send.

        """
        raise NotImplementedError


def get_client() -> Client:
    """Return the default chat client implementation.

    Returns:
        Client implementation.

    """
    raise NotImplementedError
