"""Persistence gateway - order and cart rows.

Every mutation commits on its own. Batch operations built on top of the
gateway (checkout assembly, schedule reordering) are therefore not
transactional: a failure part-way leaves earlier writes in place and the
caller reports it.
"""

from abc import ABC, abstractmethod
from uuid import uuid4

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from printshop.config import settings
from printshop.core.order_status import ACTIVE_STATUSES, OrderStatus
from printshop.infra.logging import get_logger
from printshop.models import CartItem, Order
from printshop.schemas.cart import CartLine
from printshop.schemas.order import NewOrder, OrderRecord

logger = get_logger(__name__)


class GatewayError(Exception):
    """A persistence call failed."""


class OrderNotFoundError(GatewayError):
    """No order matches the given id or number."""


class MissingPriorityColumnError(GatewayError):
    """The orders table has no ``print_priority`` column.

    The database predates the print schedule and needs its migration;
    retrying will not help.
    """

    def __init__(self) -> None:
        super().__init__(
            "orders.print_priority column not found; run the print schedule migration"
        )


def generate_order_number(prefix: str | None = None) -> str:
    """Short human-readable order number, e.g. ``PP-3F9A1C2B``."""
    return f"{prefix or settings.order_number_prefix}-{uuid4().hex[:8].upper()}"


def is_missing_priority_column(exc: BaseException) -> bool:
    """Recognize the driver error for an absent print_priority column.

    Postgres: column "print_priority" of relation "orders" does not exist
    SQLite:   no such column: print_priority
    """
    message = str(getattr(exc, "orig", None) or exc).lower()
    return "print_priority" in message and "column" in message


class OrderGateway(ABC):
    """Order and cart persistence used by the services layer."""

    @abstractmethod
    async def create_order(self, order: NewOrder) -> OrderRecord:
        """Insert one order row and return it with its generated number."""

    @abstractmethod
    async def update_order_status(self, order_id: str, status: OrderStatus) -> OrderRecord:
        """Set an order's status."""

    @abstractmethod
    async def update_order_priority(self, order_id: str, priority: int) -> None:
        """Set an order's print_priority.

        Raises:
            MissingPriorityColumnError: If the column does not exist
            OrderNotFoundError: If no order has this id
        """

    @abstractmethod
    async def list_active_orders(self) -> list[OrderRecord]:
        """Orders whose status occupies the print queue, with their product."""

    @abstractmethod
    async def get_order(self, order_id: str) -> OrderRecord | None:
        ...

    @abstractmethod
    async def get_order_by_number(self, order_number: str) -> OrderRecord | None:
        ...

    @abstractmethod
    async def count_orders_by_status(self, status: OrderStatus) -> int:
        ...

    @abstractmethod
    async def list_cart(self, session_id: str) -> list[CartLine]:
        ...

    @abstractmethod
    async def add_cart_line(self, line: CartLine) -> CartLine:
        ...

    @abstractmethod
    async def update_cart_quantity(self, session_id: str, line_id: str, quantity: int) -> CartLine | None:
        """Set a line's quantity; returns None when the line does not exist."""

    @abstractmethod
    async def remove_cart_line(self, session_id: str, line_id: str) -> bool:
        ...

    @abstractmethod
    async def clear_cart(self, session_id: str) -> int:
        """Delete every line of a session; returns the number removed."""


class SqlOrderGateway(OrderGateway):
    """OrderGateway over an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _commit(self, action: str, **context: object) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Commit failed", action=action, error=str(e), **context)
            raise GatewayError(f"{action} failed: {e}") from e

    async def _load_order(self, order_id: str) -> Order | None:
        result = await self.session.execute(
            select(Order)
            .options(selectinload(Order.product))
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    # =========================================================================
    # Orders
    # =========================================================================

    async def create_order(self, order: NewOrder) -> OrderRecord:
        row = Order(
            order_number=generate_order_number(),
            status=OrderStatus.PENDING.value,
            **order.model_dump(),
        )
        self.session.add(row)
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Order insert failed",
                checkout_id=order.checkout_id,
                product_id=order.product_id,
                error=str(e),
            )
            raise GatewayError(f"Order insert failed: {e}") from e
        await self._commit("create_order", order_number=row.order_number)

        loaded = await self._load_order(row.id)
        logger.info(
            "Order created",
            order_number=row.order_number,
            checkout_id=order.checkout_id,
            total_amount=str(order.total_amount),
        )
        return OrderRecord.model_validate(loaded or row)

    async def update_order_status(self, order_id: str, status: OrderStatus) -> OrderRecord:
        row = await self._load_order(order_id)
        if row is None:
            raise OrderNotFoundError(f"Order not found: {order_id}")
        row.status = status.value
        await self._commit("update_order_status", order_id=order_id)
        logger.info("Order status updated", order_number=row.order_number, status=status.value)
        return OrderRecord.model_validate(row)

    async def update_order_priority(self, order_id: str, priority: int) -> None:
        try:
            result = await self.session.execute(
                update(Order).where(Order.id == order_id).values(print_priority=priority)
            )
            await self.session.commit()
        except DBAPIError as e:
            await self.session.rollback()
            if is_missing_priority_column(e):
                raise MissingPriorityColumnError() from e
            raise GatewayError(f"Priority update failed: {e}") from e

        if result.rowcount == 0:
            raise OrderNotFoundError(f"Order not found: {order_id}")

    async def list_active_orders(self) -> list[OrderRecord]:
        result = await self.session.execute(
            select(Order)
            .options(selectinload(Order.product))
            .where(func.lower(Order.status).in_([s.value for s in ACTIVE_STATUSES]))
        )
        return [OrderRecord.model_validate(row) for row in result.scalars().all()]

    async def get_order(self, order_id: str) -> OrderRecord | None:
        row = await self._load_order(order_id)
        return OrderRecord.model_validate(row) if row else None

    async def get_order_by_number(self, order_number: str) -> OrderRecord | None:
        result = await self.session.execute(
            select(Order)
            .options(selectinload(Order.product))
            .where(Order.order_number == order_number)
        )
        row = result.scalar_one_or_none()
        return OrderRecord.model_validate(row) if row else None

    async def count_orders_by_status(self, status: OrderStatus) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Order).where(func.lower(Order.status) == status.value)
        )
        return int(result.scalar_one())

    # =========================================================================
    # Cart
    # =========================================================================

    async def list_cart(self, session_id: str) -> list[CartLine]:
        result = await self.session.execute(
            select(CartItem)
            .where(CartItem.session_id == session_id)
            .order_by(CartItem.created_at, CartItem.id)
        )
        return [CartLine.model_validate(row) for row in result.scalars().all()]

    async def add_cart_line(self, line: CartLine) -> CartLine:
        row = CartItem(**line.model_dump(exclude={"id"}, exclude_none=True))
        self.session.add(row)
        await self._commit("add_cart_line", session_id=line.session_id)
        return CartLine.model_validate(row)

    async def update_cart_quantity(self, session_id: str, line_id: str, quantity: int) -> CartLine | None:
        row = await self.session.get(CartItem, line_id)
        if row is None or row.session_id != session_id:
            return None
        row.quantity = quantity
        await self._commit("update_cart_quantity", line_id=line_id)
        return CartLine.model_validate(row)

    async def remove_cart_line(self, session_id: str, line_id: str) -> bool:
        result = await self.session.execute(
            delete(CartItem).where(CartItem.id == line_id, CartItem.session_id == session_id)
        )
        await self._commit("remove_cart_line", line_id=line_id)
        return result.rowcount > 0

    async def clear_cart(self, session_id: str) -> int:
        result = await self.session.execute(delete(CartItem).where(CartItem.session_id == session_id))
        await self._commit("clear_cart", session_id=session_id)
        return result.rowcount or 0
