"""Order schemas: customer details, persisted order rows and assembly results."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from printshop.core.order_status import OrderStatus
from printshop.schemas.catalog import resolve_print_minutes
from printshop.schemas.fulfillment import FulfillmentType, display_address


class CustomerInfo(BaseModel):
    """Contact details required before any order row is written."""

    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=50)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name is required")
        return v

    @field_validator("phone")
    @classmethod
    def blank_phone_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class NewOrder(BaseModel):
    """One order row to create (one physical unit)."""

    checkout_id: str
    product_id: str | None
    customer_name: str
    customer_email: str
    customer_phone: str | None = None
    fulfillment_type: FulfillmentType
    delivery_location: str
    delivery_address: str | None = None
    shipping_cost: Decimal = Decimal("0")
    product_price: Decimal
    total_amount: Decimal
    selected_color: str | None = None
    selected_material: str | None = None
    selected_size: str | None = None
    customization_details: str | None = None
    notes: str | None = None


class OrderProduct(BaseModel):
    """Product fields the print schedule needs."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    print_time_small: int | None = None
    print_time_medium: int | None = None
    print_time_large: int | None = None

    def print_minutes(self, size: str | None) -> int:
        return resolve_print_minutes(
            size, self.print_time_small, self.print_time_medium, self.print_time_large
        )


class OrderRecord(BaseModel):
    """A persisted order row."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    order_number: str
    checkout_id: str
    product_id: str | None = None
    status: OrderStatus
    customer_name: str
    customer_email: str
    customer_phone: str | None = None
    fulfillment_type: FulfillmentType
    delivery_location: str
    delivery_address: str | None = None
    shipping_cost: Decimal
    product_price: Decimal
    total_amount: Decimal
    selected_color: str | None = None
    selected_material: str | None = None
    selected_size: str | None = None
    customization_details: str | None = None
    notes: str | None = None
    print_priority: int | None = None
    created_at: datetime
    product: OrderProduct | None = None

    @field_validator("status", mode="before")
    @classmethod
    def lowercase_status(cls, v: object) -> object:
        return v.lower() if isinstance(v, str) else v

    @property
    def display_address(self) -> str:
        return display_address(self.fulfillment_type, self.delivery_location, self.delivery_address)


class AssemblyFailure(BaseModel):
    """The unit that could not be created; later units were not attempted."""

    line_index: int
    unit_index: int
    product_id: str | None
    error: str
    error_type: str


class AssemblyResult(BaseModel):
    """Outcome of turning a cart into order rows.

    Creation is sequential and not transactional: on failure the rows
    already written stay written and are listed here.
    """

    checkout_id: str
    expected_units: int
    orders: list[OrderRecord] = Field(default_factory=list)
    failure: AssemblyFailure | None = None

    @property
    def order_numbers(self) -> list[str]:
        return [order.order_number for order in self.orders]

    @property
    def succeeded(self) -> bool:
        return self.failure is None and len(self.orders) == self.expected_units

    @property
    def is_partial(self) -> bool:
        return self.failure is not None and bool(self.orders)

    @property
    def shipping_order_number(self) -> str | None:
        """Order row carrying the checkout's shipping charge."""
        for order in self.orders:
            if order.shipping_cost > 0:
                return order.order_number
        return self.orders[0].order_number if self.orders else None


class TrackedOrder(BaseModel):
    """Public view of an order for status tracking."""

    model_config = ConfigDict(from_attributes=True)

    order_number: str
    status: OrderStatus
    customer_name: str
    product_title: str | None = None
    created_at: datetime


class StatusUpdateRequest(BaseModel):
    status: OrderStatus
