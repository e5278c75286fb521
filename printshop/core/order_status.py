"""Order status lifecycle.

    pending -> confirmed -> printing -> finishing -> ready -> delivered
    any non-terminal status -> cancelled

Forward moves may skip steps (a shop can mark a pending order as printing);
moving backwards or leaving a terminal status is rejected.
"""

from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PRINTING = "printing"
    FINISHING = "finishing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


ORDER_FLOW: tuple[OrderStatus, ...] = (
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PRINTING,
    OrderStatus.FINISHING,
    OrderStatus.READY,
    OrderStatus.DELIVERED,
)

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

# Orders in these statuses occupy the print queue
ACTIVE_STATUSES = frozenset(
    {OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PRINTING, OrderStatus.FINISHING}
)


class InvalidStatusTransitionError(ValueError):
    """Raised when an order cannot move to the requested status."""

    def __init__(self, current: OrderStatus, target: OrderStatus) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot move order from '{current.value}' to '{target.value}'")


def is_active(status: str | OrderStatus) -> bool:
    """Case-insensitive check for print-queue membership."""
    try:
        return OrderStatus(str(getattr(status, "value", status)).lower()) in ACTIVE_STATUSES
    except ValueError:
        return False


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    if current in TERMINAL_STATUSES or current == target:
        return False
    if target == OrderStatus.CANCELLED:
        return True
    return ORDER_FLOW.index(target) > ORDER_FLOW.index(current)


def ensure_transition(current: OrderStatus, target: OrderStatus) -> None:
    """Raise InvalidStatusTransitionError unless ``current -> target`` is allowed."""
    if not can_transition(current, target):
        raise InvalidStatusTransitionError(current, target)
