"""Print schedule - active orders on a single-printer timeline.

Queue order:
    1. orders with a print_priority, ascending
    2. orders without one, after all prioritized orders
    ties broken by created_at, oldest first

Each order's duration comes from its product's per-size print time. The
timeline is cumulative from ``now``: one printer, one job at a time.
"""

from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from printshop.core.order_status import is_active
from printshop.infra.logging import get_logger
from printshop.schemas.catalog import DEFAULT_PRINT_MINUTES
from printshop.schemas.order import OrderRecord
from printshop.schemas.schedule import PrintSchedule, ReorderFailure, ReorderResult, ScheduleEntry
from printshop.services.persistence_gateway import MissingPriorityColumnError, OrderGateway

logger = get_logger(__name__)


def _aware(value: datetime) -> datetime:
    # SQLite returns naive timestamps; treat them as UTC
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def sort_key(order: OrderRecord) -> tuple[int, int, datetime]:
    if order.print_priority is None:
        return (1, 0, _aware(order.created_at))
    return (0, order.print_priority, _aware(order.created_at))


def print_minutes(order: OrderRecord) -> int:
    """Print duration of one order; orders without a product take an hour."""
    if order.product is None:
        return DEFAULT_PRINT_MINUTES["small"]
    return order.product.print_minutes(order.selected_size)


def build_timeline(orders: Sequence[OrderRecord], now: datetime) -> list[ScheduleEntry]:
    """Place already-sorted orders back to back starting at ``now``."""
    entries: list[ScheduleEntry] = []
    offset = 0
    for position, order in enumerate(orders, start=1):
        minutes = print_minutes(order)
        entries.append(
            ScheduleEntry(
                position=position,
                order=order,
                print_time_minutes=minutes,
                start_offset_minutes=offset,
                end_offset_minutes=offset + minutes,
                estimated_start=now + timedelta(minutes=offset),
                estimated_end=now + timedelta(minutes=offset + minutes),
            )
        )
        offset += minutes
    return entries


def format_duration(minutes: int) -> str:
    """Compact duration: "45m", "2h", "1h 30m"."""
    hours, mins = divmod(max(minutes, 0), 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def move(order_ids: Sequence[str], order_id: str, to_index: int) -> list[str]:
    """Return the queue with ``order_id`` moved to ``to_index`` (clamped).

    Raises:
        ValueError: If order_id is not in the queue
    """
    ids = list(order_ids)
    ids.remove(order_id)
    ids.insert(min(max(to_index, 0), len(ids)), order_id)
    return ids


class ScheduleQueue:
    """Builds the print schedule and persists manual reordering."""

    def __init__(self, gateway: OrderGateway) -> None:
        self.gateway = gateway

    async def load(self, now: datetime | None = None) -> PrintSchedule:
        now = now or datetime.now(timezone.utc)
        orders = [o for o in await self.gateway.list_active_orders() if is_active(o.status)]
        orders.sort(key=sort_key)
        entries = build_timeline(orders, now)
        total = entries[-1].end_offset_minutes if entries else 0

        logger.debug("Print schedule built", orders=len(entries), total_minutes=total)
        return PrintSchedule(
            generated_at=now,
            entries=entries,
            total_print_minutes=total,
            total_print_time=format_duration(total),
            estimated_completion=entries[-1].estimated_end if entries else None,
        )

    async def reorder(self, order_ids: Sequence[str]) -> ReorderResult:
        """Persist a displayed queue order as print_priority 1..n.

        Updates are sent one by one. A failure does not stop the batch and
        does not undo earlier updates; failures are reported together.
        """
        result = ReorderResult()
        for index, order_id in enumerate(order_ids):
            try:
                await self.gateway.update_order_priority(order_id, index + 1)
            except MissingPriorityColumnError as e:
                result.missing_priority_column = True
                result.failed.append(ReorderFailure(order_id=order_id, error=str(e)))
            except Exception as e:
                logger.warning(
                    "Priority update failed",
                    order_id=order_id,
                    priority=index + 1,
                    error=str(e),
                )
                result.failed.append(ReorderFailure(order_id=order_id, error=str(e)))
            else:
                result.updated.append(order_id)

        if result.missing_priority_column:
            logger.error("print_priority column missing, schedule cannot be reordered")
        elif result.failed:
            logger.error(
                "Print schedule partially updated",
                updated=len(result.updated),
                failed=result.failed_count,
            )
        else:
            logger.info("Print schedule reordered", orders=len(result.updated))
        return result

    async def move_order(self, order_id: str, to_index: int, now: datetime | None = None) -> ReorderResult:
        """Drag-and-drop: move one order within the current queue and persist it."""
        schedule = await self.load(now)
        ids = [entry.order.id for entry in schedule.entries]
        return await self.reorder(move(ids, order_id, to_index))
