from abc import ABC, abstractmethod
from typing import List


class IMessageSender(ABC):
    """Contract for sending notifications.

    Order services depend on this abstraction, never on a concrete sender.
    """

    @property
    @abstractmethod
    def sender_type(self) -> str:
        """Short label of the delivery channel ("Email", "SMS", ...)."""

    @abstractmethod
    def send(self, message: str) -> str:
        """Send a message.

        Args:
            message: The message to send.

        Returns:
            Human-readable result of the send operation.
        """


class IOrderRepository(ABC):
    """Contract for order storage."""

    @abstractmethod
    def save(self, order_id: str) -> str:
        """Store an order.

        Args:
            order_id: The order identifier.

        Returns:
            Human-readable result of the save operation.
        """

    @abstractmethod
    def get_all_orders(self) -> List[str]:
        """Return every stored order identifier, oldest first."""

    @property
    @abstractmethod
    def order_count(self) -> int:
        """Number of stored orders."""
