"""Checkout service - shipping quotes and order placement.

Lines and unit prices come from the session cart, which priced them on
add, and shipping is recomputed from the settings snapshot. Amounts sent
by the client are never trusted.
"""

from collections.abc import Sequence
from decimal import Decimal

from printshop.core.config_access import ConfigAccess
from printshop.core.money import currency_symbol
from printshop.core.zone_resolver import ZoneResolver, promo_applies, shipping_cost
from printshop.infra.logging import get_logger
from printshop.schemas.cart import CartLine
from printshop.schemas.checkout import (
    CheckoutQuote,
    CheckoutQuoteRequest,
    PlaceOrderRequest,
    PlaceOrderResponse,
)
from printshop.schemas.fulfillment import (
    Fulfillment,
    FulfillmentType,
    ShippingFulfillment,
)
from printshop.services.order_assembler import CheckoutValidationError, OrderAssembler
from printshop.services.persistence_gateway import OrderGateway
from printshop.services.settings_store import SettingsStore

logger = get_logger(__name__)


def cart_subtotal(lines: Sequence[CartLine]) -> Decimal:
    return sum((line.line_total for line in lines), Decimal("0"))


class CheckoutService:
    """Quotes fulfillment costs and turns carts into orders."""

    def __init__(self, gateway: OrderGateway, settings_store: SettingsStore) -> None:
        self.gateway = gateway
        self.settings_store = settings_store
        self.assembler = OrderAssembler(gateway)

    async def _lines(self, session_id: str) -> list[CartLine]:
        """Server-priced lines of the session cart."""
        return await self.gateway.list_cart(session_id)

    def _quote(
        self,
        config: ConfigAccess,
        lines: Sequence[CartLine],
        city: str,
        state: str,
        fulfillment_type: FulfillmentType | None,
        promo_code: str | None,
        promo_acknowledged: bool,
    ) -> CheckoutQuote:
        subtotal = cart_subtotal(lines)
        options = ZoneResolver.from_config(config).fulfillment_options(city, state)
        chosen = fulfillment_type or options.default
        symbol = currency_symbol(config)

        if chosen is None:
            return CheckoutQuote(
                subtotal=subtotal,
                options=options,
                zone=options.zone,
                total=subtotal,
                currency_symbol=symbol,
            )
        if options.is_complete and chosen not in options.available:
            raise CheckoutValidationError(
                f"Fulfillment '{chosen}' is not available for this address"
            )

        promo = chosen == "delivery" and promo_applies(config, promo_code, promo_acknowledged)
        quote = shipping_cost(chosen, subtotal, config, promo)
        return CheckoutQuote(
            subtotal=subtotal,
            options=options,
            zone=options.zone,
            fulfillment_type=chosen,
            shipping=quote.shipping,
            total=subtotal + quote.shipping,
            promo_applied=quote.promo_applied,
            free_shipping_threshold=quote.free_shipping_threshold,
            currency_symbol=symbol,
        )

    async def quote(self, request: CheckoutQuoteRequest) -> CheckoutQuote:
        """Fulfillment options and totals for the address typed so far.

        Raises:
            CheckoutValidationError: If the requested fulfillment is not offered
        """
        config = await self.settings_store.load()
        lines = await self._lines(request.session_id)
        return self._quote(
            config,
            lines,
            request.city,
            request.state,
            request.fulfillment_type,
            request.promo_code,
            request.promo_acknowledged,
        )

    def _check_zone(self, config: ConfigAccess, fulfillment: Fulfillment) -> None:
        zones = ZoneResolver.from_config(config)
        if isinstance(fulfillment, ShippingFulfillment):
            zone = zones.resolve(fulfillment.city, fulfillment.state)
            if zone is not None:
                raise CheckoutValidationError(
                    f"'{zone.label}' is a delivery area; choose pickup or delivery instead"
                )
        elif fulfillment.zone.strip().lower() not in (label.lower() for label in zones.labels):
            raise CheckoutValidationError(
                f"'{fulfillment.zone}' is not a delivery area; choose shipping instead"
            )

    async def place_order(self, request: PlaceOrderRequest) -> PlaceOrderResponse:
        """Create one order row per unit in the cart.

        The cart is cleared only when every unit was created.

        Raises:
            CheckoutValidationError: If the cart, customer or fulfillment is
                invalid (nothing is written)
        """
        config = await self.settings_store.load()
        lines = await self._lines(request.session_id)
        if not lines:
            raise CheckoutValidationError("Cart is empty")
        self._check_zone(config, request.fulfillment)

        subtotal = cart_subtotal(lines)
        fulfillment_type = request.fulfillment.mode
        promo = fulfillment_type == "delivery" and promo_applies(
            config, request.promo_code, request.promo_acknowledged
        )
        shipping = shipping_cost(fulfillment_type, subtotal, config, promo).shipping

        result = await self.assembler.assemble(
            lines,
            request.customer,
            request.fulfillment,
            shipping,
            request.notes,
        )

        if result.succeeded:
            await self.gateway.clear_cart(request.session_id)

        return PlaceOrderResponse(
            checkout_id=result.checkout_id,
            order_numbers=result.order_numbers,
            expected_units=result.expected_units,
            shipping=shipping,
            shipping_order_number=result.shipping_order_number,
            total=subtotal + shipping,
            complete=result.succeeded,
            failed=result.failure.error if result.failure else None,
        )
