"""Tests for the print schedule."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from printshop.schemas.order import OrderProduct
from printshop.services.schedule_queue import (
    ScheduleQueue,
    build_timeline,
    format_duration,
    move,
    print_minutes,
    sort_key,
)

BASE_TIME = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class TestOrdering:
    def test_priority_first_then_nulls_then_created_at(self, gateway):
        a = gateway.add_order(order_number="A", created_at=BASE_TIME)
        b = gateway.add_order(order_number="B", print_priority=2, created_at=BASE_TIME + timedelta(minutes=1))
        c = gateway.add_order(order_number="C", print_priority=1, created_at=BASE_TIME + timedelta(minutes=2))

        ordered = sorted([a, b, c], key=sort_key)

        assert [o.order_number for o in ordered] == ["C", "B", "A"]

    def test_nulls_are_first_in_first_out(self, gateway):
        late = gateway.add_order(order_number="LATE", created_at=BASE_TIME + timedelta(hours=1))
        early = gateway.add_order(order_number="EARLY", created_at=BASE_TIME)
        assert [o.order_number for o in sorted([late, early], key=sort_key)] == ["EARLY", "LATE"]


class TestTimeline:
    def test_print_minutes_by_size(self, gateway):
        product = OrderProduct(id="p", title="P", print_time_small=45, print_time_large=200)
        small = gateway.add_order(product=product, selected_size=None)
        medium = gateway.add_order(product=product, selected_size="medium")
        large = gateway.add_order(product=product, selected_size="large")
        no_product = gateway.add_order(product=None, selected_size="large")

        assert print_minutes(small) == 45
        assert print_minutes(medium) == 120
        assert print_minutes(large) == 200
        assert print_minutes(no_product) == 60

    def test_cumulative_single_printer(self, gateway):
        product = OrderProduct(id="p", title="P", print_time_small=30, print_time_medium=90)
        first = gateway.add_order(product=product, selected_size="small")
        second = gateway.add_order(product=product, selected_size="medium")

        entries = build_timeline([first, second], BASE_TIME)

        assert entries[0].start_offset_minutes == 0
        assert entries[0].end_offset_minutes == 30
        assert entries[1].start_offset_minutes == 30
        assert entries[1].end_offset_minutes == 120
        assert entries[1].estimated_end == BASE_TIME + timedelta(minutes=120)
        assert [e.position for e in entries] == [1, 2]


class TestScheduleQueue:
    @pytest.mark.asyncio
    async def test_load_excludes_inactive_orders(self, gateway):
        gateway.add_order(order_number="P1", status="pending")
        gateway.add_order(order_number="R1", status="ready")
        gateway.add_order(order_number="X1", status="cancelled")
        gateway.add_order(order_number="F1", status="finishing", print_priority=1)

        schedule = await ScheduleQueue(gateway).load(now=BASE_TIME)

        assert [e.order.order_number for e in schedule.entries] == ["F1", "P1"]
        assert schedule.total_print_minutes == 120
        assert schedule.total_print_time == "2h"
        assert schedule.estimated_completion == BASE_TIME + timedelta(minutes=120)

    @pytest.mark.asyncio
    async def test_empty_queue(self, gateway):
        schedule = await ScheduleQueue(gateway).load(now=BASE_TIME)
        assert schedule.entries == []
        assert schedule.estimated_completion is None

    @pytest.mark.asyncio
    async def test_reorder_assigns_one_based_priorities(self, gateway):
        x = gateway.add_order(order_number="X")
        y = gateway.add_order(order_number="Y")
        z = gateway.add_order(order_number="Z")

        result = await ScheduleQueue(gateway).reorder([z.id, x.id, y.id])

        assert result.ok is True
        assert result.message == "Print schedule updated"
        assert gateway.orders[z.id].print_priority == 1
        assert gateway.orders[x.id].print_priority == 2
        assert gateway.orders[y.id].print_priority == 3

    @pytest.mark.asyncio
    async def test_reorder_reports_failures_in_aggregate(self, gateway):
        ids = [gateway.add_order(product_price=Decimal(i)).id for i in range(4)]
        gateway.fail_priority_for = {ids[1], ids[3]}

        result = await ScheduleQueue(gateway).reorder(ids)

        assert result.updated == [ids[0], ids[2]]
        assert result.failed_count == 2
        assert result.missing_priority_column is False
        assert result.message == "Failed to update 2 orders"
        assert len(gateway.priority_calls) == 4
        assert gateway.orders[ids[2]].print_priority == 3

    @pytest.mark.asyncio
    async def test_reorder_flags_missing_priority_column(self, gateway):
        ids = [gateway.add_order().id for _ in range(2)]
        gateway.priority_column_missing = True

        result = await ScheduleQueue(gateway).reorder(ids)

        assert result.missing_priority_column is True
        assert result.failed_count == 2
        assert "print_priority" in result.message

    @pytest.mark.asyncio
    async def test_move_order(self, gateway):
        a = gateway.add_order(order_number="A", created_at=BASE_TIME)
        b = gateway.add_order(order_number="B", created_at=BASE_TIME + timedelta(minutes=1))
        c = gateway.add_order(order_number="C", created_at=BASE_TIME + timedelta(minutes=2))

        await ScheduleQueue(gateway).move_order(c.id, 0, now=BASE_TIME)

        assert gateway.priority_calls == [(c.id, 1), (a.id, 2), (b.id, 3)]


class TestHelpers:
    @pytest.mark.parametrize(
        "minutes,expected",
        [(0, "0m"), (45, "45m"), (120, "2h"), (90, "1h 30m"), (-5, "0m")],
    )
    def test_format_duration(self, minutes: int, expected: str):
        assert format_duration(minutes) == expected

    def test_move(self):
        assert move(["x", "y", "z"], "z", 0) == ["z", "x", "y"]
        assert move(["x", "y", "z"], "x", 99) == ["y", "z", "x"]

    def test_move_unknown_id(self):
        with pytest.raises(ValueError):
            move(["x"], "nope", 0)
