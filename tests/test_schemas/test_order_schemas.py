"""Tests for order, fulfillment and schedule schemas."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import TypeAdapter, ValidationError

from printshop.schemas.fulfillment import (
    DeliveryFulfillment,
    Fulfillment,
    PickupFulfillment,
    ShippingFulfillment,
    delivery_address,
    delivery_location,
    display_address,
)
from printshop.schemas.order import AssemblyFailure, AssemblyResult, CustomerInfo, OrderRecord
from printshop.schemas.schedule import ReorderFailure, ReorderResult

fulfillment_adapter = TypeAdapter(Fulfillment)


class TestFulfillment:
    def test_discriminated_by_mode(self):
        assert isinstance(fulfillment_adapter.validate_python({"mode": "pickup", "zone": "Cumming, GA"}), PickupFulfillment)
        shipped = fulfillment_adapter.validate_python({"mode": "shipping", "address": "1 Main"})
        assert isinstance(shipped, ShippingFulfillment)

    def test_delivery_needs_address(self):
        with pytest.raises(ValidationError):
            fulfillment_adapter.validate_python({"mode": "delivery", "zone": "Cumming, GA"})

    def test_columns(self):
        pickup = PickupFulfillment(zone="Cumming, GA")
        delivery = DeliveryFulfillment(zone="Cumming, GA", address="2 Oak")
        shipping = ShippingFulfillment(address="3 Pine", city="Macon", state="GA")

        assert (delivery_location(pickup), delivery_address(pickup)) == ("Cumming, GA", None)
        assert (delivery_location(delivery), delivery_address(delivery)) == ("Cumming, GA", "2 Oak")
        assert (delivery_location(shipping), delivery_address(shipping)) == ("Macon, GA", "3 Pine")

    def test_display_address(self):
        assert display_address("pickup", "Cumming, GA", None) == "PICKUP - Cumming, GA"
        assert display_address("delivery", "Cumming, GA", "2 Oak") == "2 Oak"


class TestCustomerInfo:
    def test_strips_and_blank_phone(self):
        customer = CustomerInfo(name="  Ada ", email="ada@example.com", phone="  ")
        assert customer.name == "Ada"
        assert customer.phone is None

    @pytest.mark.parametrize("name,email", [("", "ada@example.com"), ("   ", "ada@example.com"), ("Ada", "not-an-email")])
    def test_required_fields(self, name: str, email: str):
        with pytest.raises(ValidationError):
            CustomerInfo(name=name, email=email)


def make_order(number: str, shipping: str = "0") -> OrderRecord:
    return OrderRecord(
        id=number,
        order_number=number,
        checkout_id="c",
        status="PENDING",
        customer_name="Ada",
        customer_email="ada@example.com",
        fulfillment_type="pickup",
        delivery_location="Cumming, GA",
        shipping_cost=Decimal(shipping),
        product_price=Decimal("10"),
        total_amount=Decimal("10") + Decimal(shipping),
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )


class TestAssemblyResult:
    def test_status_is_case_insensitive(self):
        assert make_order("A").status.value == "pending"

    def test_complete(self):
        result = AssemblyResult(checkout_id="c", expected_units=2, orders=[make_order("A", "5"), make_order("B")])
        assert result.succeeded is True
        assert result.is_partial is False
        assert result.shipping_order_number == "A"

    def test_partial(self):
        result = AssemblyResult(
            checkout_id="c",
            expected_units=2,
            orders=[make_order("A")],
            failure=AssemblyFailure(line_index=0, unit_index=1, product_id="p", error="boom", error_type="GatewayError"),
        )
        assert result.succeeded is False
        assert result.is_partial is True
        assert result.order_numbers == ["A"]


class TestReorderResult:
    def test_messages(self):
        assert ReorderResult(updated=["a"]).message == "Print schedule updated"
        failed = ReorderResult(failed=[ReorderFailure(order_id="a", error="x")])
        assert failed.ok is False
        assert failed.message == "Failed to update 1 orders"
        missing = ReorderResult(failed=failed.failed, missing_priority_column=True)
        assert "migration" in missing.message
