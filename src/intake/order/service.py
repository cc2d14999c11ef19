"""In-process order book shared by the HTTP handlers."""

import structlog

from intake.order.order import Order
from intake.order.repository import OrderRepository
from intake.utils.locks import RWLock

logger = structlog.get_logger(__name__)


class OrderService:
    """Accepts orders into storage and lists the ones seen so far.

    The listed orders come from memory: filled by :meth:`load` at startup
    and extended by every successful :meth:`accept_order`. Writes made to
    storage by other processes are not picked up.
    """

    def __init__(self, repository: OrderRepository):
        self.repository = repository
        self._orders: list[Order] = []
        self._lock = RWLock()

    def load(self) -> int:
        """Replace the in-memory orders with everything in storage."""
        with self._lock.write():
            self._orders = self.repository.get_all_orders()
            count = len(self._orders)
        logger.info("Order cache loaded", count=count)
        return count

    def accept_order(self, order: Order) -> Order:
        """Persist ``order`` and remember it.

        Storage errors and catalog conflicts propagate and leave the
        in-memory orders untouched.
        """
        with self._lock.write():
            self.repository.save_order(order)
            self._orders.append(order)
        logger.info("Order accepted", order_uid=order.order_uid)
        return order

    def list_orders(self) -> list[Order]:
        with self._lock.read():
            return list(self._orders)

    def count(self) -> int:
        with self._lock.read():
            return len(self._orders)
