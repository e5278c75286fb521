"""Pydantic schemas for request/response validation."""

from printshop.schemas.cart import AddCartItemRequest, CartLine, CartView, UpdateQuantityRequest
from printshop.schemas.catalog import (
    ColorOption,
    ColorSwatch,
    ColorSwatches,
    ComplexityTierOption,
    MaterialOption,
    ProductOptions,
)
from printshop.schemas.checkout import (
    CheckoutQuote,
    CheckoutQuoteRequest,
    PlaceOrderRequest,
    PlaceOrderResponse,
)
from printshop.schemas.common import ErrorResponse, HealthResponse
from printshop.schemas.fulfillment import (
    DeliveryFulfillment,
    Fulfillment,
    FulfillmentOptions,
    PickupFulfillment,
    ShippingFulfillment,
    ShippingQuote,
)
from printshop.schemas.order import (
    AssemblyFailure,
    AssemblyResult,
    CustomerInfo,
    NewOrder,
    OrderRecord,
    TrackedOrder,
)
from printshop.schemas.pricing import (
    CalculatorRequest,
    PriceBreakdown,
    PricingDiagnostics,
    ProductQuoteRequest,
    QuoteResponse,
    SelectedColor,
)
from printshop.schemas.schedule import (
    PrintSchedule,
    ReorderRequest,
    ReorderResult,
    ScheduleEntry,
)

__all__ = [
    "AddCartItemRequest",
    "AssemblyFailure",
    "AssemblyResult",
    "CalculatorRequest",
    "CartLine",
    "CartView",
    "CheckoutQuote",
    "CheckoutQuoteRequest",
    "ColorOption",
    "ColorSwatch",
    "ColorSwatches",
    "ComplexityTierOption",
    "CustomerInfo",
    "DeliveryFulfillment",
    "ErrorResponse",
    "Fulfillment",
    "FulfillmentOptions",
    "HealthResponse",
    "MaterialOption",
    "NewOrder",
    "OrderRecord",
    "PickupFulfillment",
    "PlaceOrderRequest",
    "PlaceOrderResponse",
    "PriceBreakdown",
    "PricingDiagnostics",
    "ProductOptions",
    "ProductQuoteRequest",
    "QuoteResponse",
    "ReorderRequest",
    "ReorderResult",
    "ScheduleEntry",
    "SelectedColor",
    "ShippingFulfillment",
    "ShippingQuote",
    "TrackedOrder",
    "UpdateQuantityRequest",
]
