import logging
from typing import Optional

from ioc_demo.demo.contracts import IMessageSender, IOrderRepository
from ioc_demo.demo.sender_factory import IMessageSenderFactory, MessageSenderType

logger = logging.getLogger(__name__)


def format_order_summary(repository: IOrderRepository) -> str:
    orders = repository.get_all_orders()
    return f"Currently {len(orders)} orders: [{', '.join(orders)}]"


class OrderService:
    """Places orders and sends a notification through the injected sender.

    Both collaborators arrive through the constructor; the service never
    knows which concrete repository or sender it got.
    """

    def __init__(self, repository: IOrderRepository, message_sender: IMessageSender) -> None:
        self.repository = repository
        self.message_sender = message_sender

    def place_order(self, order_id: str) -> str:
        """Save the order and notify about it.

        Returns:
            The save and send results on two lines, or a failure line if either step raised.
        """
        logger.info("Processing order: %s", order_id)
        try:
            save_result = self.repository.save(order_id)
            notify_result = self.message_sender.send(f"Order {order_id} processed")
        except Exception as e:
            logger.exception("Failed to process order: %s", order_id)
            return f"❌ Failed to process order {order_id}: {e}"

        logger.info("Order processed successfully: %s", order_id)
        return f"{save_result}\n{notify_result}"

    def get_order_summary(self) -> str:
        logger.debug("Retrieving order summary")
        summary = format_order_summary(self.repository)
        logger.debug("Order summary generated: %s", summary)
        return summary

    def get_message_sender_type(self) -> str:
        return self.message_sender.sender_type


class DynamicOrderService:
    """Order service that picks its sender at call time through a factory."""

    def __init__(self, repository: IOrderRepository, sender_factory: IMessageSenderFactory) -> None:
        self.repository = repository
        self.sender_factory = sender_factory

    def process_order(self, order_id: str, sender_type: Optional[MessageSenderType] = None) -> bool:
        """Save the order and notify through the chosen (or default) channel.

        Args:
            order_id: The order identifier.
            sender_type: Channel for this order only; the factory default when omitted.

        Returns:
            True if the order was saved and the notification sent.
        """
        if sender_type is None:
            sender = self.sender_factory.get_default_sender()
        else:
            sender = self.sender_factory.create_sender(sender_type)
        return self._process_with_sender(order_id, sender)

    def switch_default_sender(self, sender_type: MessageSenderType) -> None:
        self.sender_factory.set_default_sender(sender_type)
        logger.info("Default message sender switched to: %s", sender_type)

    def _process_with_sender(self, order_id: str, sender: IMessageSender) -> bool:
        logger.info("Processing order: %s", order_id)
        try:
            if not self.repository.save(order_id):
                logger.error("Failed to save order: %s", order_id)
                return False
            sender.send(f"Order {order_id} processed")
        except Exception:
            logger.exception("Error processing order: %s", order_id)
            return False

        logger.info("Order processed successfully: %s using %s", order_id, type(sender).__name__)
        return True

    def get_order_summary(self) -> str:
        logger.debug("Retrieving order summary")
        return format_order_summary(self.repository)
