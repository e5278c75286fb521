"""Order tracking - public lookup and back-office status changes."""

from printshop.core.order_status import OrderStatus, ensure_transition
from printshop.infra.logging import get_logger
from printshop.schemas.order import OrderRecord, TrackedOrder
from printshop.services.persistence_gateway import OrderGateway, OrderNotFoundError

logger = get_logger(__name__)


def normalize_order_number(order_number: str) -> str:
    return order_number.strip().upper()


class OrderTracking:
    """Order lookup and lifecycle updates."""

    def __init__(self, gateway: OrderGateway) -> None:
        self.gateway = gateway

    async def track(self, order_number: str) -> TrackedOrder | None:
        """Find an order by number, ignoring case and surrounding spaces."""
        number = normalize_order_number(order_number)
        if not number:
            return None
        order = await self.gateway.get_order_by_number(number)
        if order is None:
            logger.info("Tracked order not found", order_number=number)
            return None
        return TrackedOrder(
            order_number=order.order_number,
            status=order.status,
            customer_name=order.customer_name,
            product_title=order.product.title if order.product else None,
            created_at=order.created_at,
        )

    async def update_status(self, order_id: str, status: OrderStatus) -> OrderRecord:
        """Move an order along its lifecycle.

        Raises:
            OrderNotFoundError: If the order does not exist
            InvalidStatusTransitionError: If the move is not allowed
        """
        order = await self.gateway.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(f"Order not found: {order_id}")
        ensure_transition(order.status, status)
        updated = await self.gateway.update_order_status(order_id, status)
        logger.info(
            "Order status changed",
            order_number=updated.order_number,
            previous=order.status.value,
            status=status.value,
        )
        return updated

    async def pending_count(self) -> int:
        return await self.gateway.count_orders_by_status(OrderStatus.PENDING)
