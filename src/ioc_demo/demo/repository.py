import logging
from typing import List

from ioc_demo.demo.contracts import IOrderRepository

logger = logging.getLogger(__name__)


class InMemoryOrderRepository(IOrderRepository):
    """Keeps orders in a process-local list.

    Registered as scoped, so each scope sees its own list. ``close()`` is
    called by the scope on disposal and empties the list.
    """

    def __init__(self) -> None:
        self._orders: List[str] = []

    @property
    def order_count(self) -> int:
        return len(self._orders)

    def save(self, order_id: str) -> str:
        logger.info("Saving order: %s", order_id)
        self._orders.append(order_id)
        logger.info("Order saved successfully. Total orders: %d", len(self._orders))
        return f"💾 Order {order_id} saved to repository"

    def get_all_orders(self) -> List[str]:
        logger.debug("Retrieving all orders. Count: %d", len(self._orders))
        return list(self._orders)

    def close(self) -> None:
        logger.debug("Releasing repository with %d order(s)", len(self._orders))
        self._orders.clear()
