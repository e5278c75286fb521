"""Cart service - per-session cart lines priced on the server."""

from decimal import Decimal

from printshop.core.catalog_options import CartValidationError, resolve_colors, validate_selection
from printshop.core.pricing_engine import PricingEngine
from printshop.infra.logging import get_logger
from printshop.schemas.cart import AddCartItemRequest, CartLine, CartView
from printshop.schemas.catalog import ProductOptions
from printshop.services.catalog_store import CatalogStore
from printshop.services.persistence_gateway import OrderGateway
from printshop.services.settings_store import SettingsStore

logger = get_logger(__name__)


def describe_colors(product: ProductOptions, color_names: list[str | None]) -> list[str]:
    """Color choices as stored on the line, e.g. ["Base: Black", "Text: Silk Gold"]."""
    described: list[str] = []
    for index, name in enumerate(color_names):
        if not name or not name.strip():
            continue
        if index < len(product.color_slots):
            described.append(f"{product.color_slots[index].label}: {name}")
        else:
            described.append(name)
    return described


def cart_view(session_id: str, lines: list[CartLine]) -> CartView:
    return CartView(
        session_id=session_id,
        items=lines,
        item_count=sum(line.quantity for line in lines),
        subtotal=sum((line.line_total for line in lines), Decimal("0")),
    )


class CartService:
    """Add, update and remove cart lines."""

    def __init__(
        self,
        gateway: OrderGateway,
        catalog: CatalogStore,
        settings_store: SettingsStore,
    ) -> None:
        self.gateway = gateway
        self.catalog = catalog
        self.settings_store = settings_store

    async def view(self, session_id: str) -> CartView:
        return cart_view(session_id, await self.gateway.list_cart(session_id))

    async def add(self, session_id: str, request: AddCartItemRequest) -> CartLine:
        """Validate the configuration, price it and add it to the cart.

        Raises:
            CartValidationError: If the product is unknown or the selection invalid
        """
        product = await self.catalog.get_product(request.product_id)
        if product is None:
            raise CartValidationError(f"Product not found: {request.product_id}")

        colors = await self.catalog.colors_by_name()
        validate_selection(
            product,
            request.material,
            request.size,
            request.colors,
            colors,
            request.customization_text,
        )

        engine = PricingEngine(
            await self.settings_store.load(),
            await self.catalog.list_complexity_tiers(),
        )
        unit_price = engine.unit_price(
            product,
            request.material,
            request.size,
            resolve_colors(request.colors, colors),
            request.customization_text,
        )

        line = await self.gateway.add_cart_line(
            CartLine(
                session_id=session_id,
                product_id=product.id,
                quantity=request.quantity,
                selected_material=request.material,
                selected_size=request.size,
                selected_colors=describe_colors(product, request.colors),
                customization_details=(request.customization_text or "").strip() or None,
                unit_price=unit_price,
            )
        )
        logger.info(
            "Cart line added",
            session_id=session_id,
            product_id=product.id,
            quantity=line.quantity,
            unit_price=str(unit_price),
        )
        return line

    async def update_quantity(self, session_id: str, line_id: str, quantity: int) -> CartLine | None:
        """Set a line's quantity; zero or less removes the line and returns None."""
        if quantity <= 0:
            await self.remove(session_id, line_id)
            return None
        return await self.gateway.update_cart_quantity(session_id, line_id, quantity)

    async def remove(self, session_id: str, line_id: str) -> bool:
        removed = await self.gateway.remove_cart_line(session_id, line_id)
        if removed:
            logger.info("Cart line removed", session_id=session_id, line_id=line_id)
        return removed

    async def clear(self, session_id: str) -> int:
        return await self.gateway.clear_cart(session_id)
