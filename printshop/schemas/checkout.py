"""Checkout quote and placement schemas."""

from decimal import Decimal

from pydantic import BaseModel, Field

from printshop.schemas.fulfillment import Fulfillment, FulfillmentOptions, FulfillmentType
from printshop.schemas.order import CustomerInfo


class CheckoutQuoteRequest(BaseModel):
    """Address and promotion details typed so far at checkout."""

    session_id: str = Field(min_length=1, description="Cart session; lines and prices come from its cart")
    city: str = ""
    state: str = ""
    fulfillment_type: FulfillmentType | None = None
    promo_code: str | None = None
    promo_acknowledged: bool = False


class CheckoutQuote(BaseModel):
    """Totals for the current checkout form state."""

    subtotal: Decimal
    options: FulfillmentOptions
    zone: str | None = None
    fulfillment_type: FulfillmentType | None = None
    shipping: Decimal = Decimal("0")
    total: Decimal
    promo_applied: bool = False
    free_shipping_threshold: Decimal | None = None
    currency_symbol: str = "$"


class PlaceOrderRequest(BaseModel):
    """Checkout submission.

    Only the session id identifies what is bought: lines and unit prices are
    read from the server-side cart, which priced them when they were added.
    """

    session_id: str = Field(min_length=1)
    customer: CustomerInfo
    fulfillment: Fulfillment
    promo_code: str | None = None
    promo_acknowledged: bool = False
    notes: str | None = Field(default=None, max_length=2000)


class PlaceOrderResponse(BaseModel):
    """Created order numbers; ``failed`` describes a partial checkout."""

    checkout_id: str
    order_numbers: list[str]
    expected_units: int
    shipping: Decimal
    shipping_order_number: str | None = None
    total: Decimal
    complete: bool
    failed: str | None = None
