"""Fulfillment schemas.

Fulfillment is a tagged variant keyed by ``mode``: pickup carries the zone,
delivery carries the zone and a street address, shipping carries only the
address.
"""

from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

FulfillmentType = Literal["pickup", "delivery", "shipping"]


class PickupFulfillment(BaseModel):
    """Customer collects the print inside a delivery zone."""

    mode: Literal["pickup"] = "pickup"
    zone: str = Field(min_length=1)


class DeliveryFulfillment(BaseModel):
    """Local drop-off inside a delivery zone."""

    mode: Literal["delivery"] = "delivery"
    zone: str = Field(min_length=1)
    address: str = Field(min_length=1)


class ShippingFulfillment(BaseModel):
    """Carrier shipping outside every delivery zone."""

    mode: Literal["shipping"] = "shipping"
    address: str = Field(min_length=1)
    city: str = ""
    state: str = ""


Fulfillment = Annotated[
    Union[PickupFulfillment, DeliveryFulfillment, ShippingFulfillment],
    Field(discriminator="mode"),
]


def delivery_location(fulfillment: Fulfillment) -> str:
    """Location column value: the zone, or "City, State" for shipments."""
    if isinstance(fulfillment, ShippingFulfillment):
        parts = [p for p in (fulfillment.city.strip(), fulfillment.state.strip()) if p]
        return ", ".join(parts) or fulfillment.address
    return fulfillment.zone


def delivery_address(fulfillment: Fulfillment) -> str | None:
    """Street address column value; pickups have none."""
    if isinstance(fulfillment, PickupFulfillment):
        return None
    return fulfillment.address


def display_address(fulfillment_type: str, location: str, address: str | None) -> str:
    """Human-readable address line, e.g. "PICKUP - Cumming, GA"."""
    if fulfillment_type == "pickup":
        return f"PICKUP - {location}"
    return address or location


class FulfillmentOptions(BaseModel):
    """Fulfillment modes offered for an address."""

    zone: str | None = None
    available: list[FulfillmentType] = Field(default_factory=list)
    default: FulfillmentType | None = None

    @property
    def is_complete(self) -> bool:
        """False while the address is too short to decide."""
        return bool(self.available)


class ShippingQuote(BaseModel):
    """Shipping cost for one checkout."""

    fulfillment_type: FulfillmentType
    shipping: Decimal
    promo_applied: bool = False
    free_shipping_threshold: Decimal | None = None
