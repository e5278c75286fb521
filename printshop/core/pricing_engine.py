"""Pricing engine - per-item price from base price and selected options.

Every component is additive and independent of the others:

    subtotal = base + material + size + colors + ams + complexity + customization
    total    = subtotal + shipping
    suggested_price = ceil(subtotal * (1 + margin / 100))

Settings consumed (all default to 0 when absent):
    material_{premium|ultra}_upcharge, size_{small|medium|large}_upcharge,
    color_{premium|ultra}_upcharge, ams_base_fee, ams_per_color_fee
"""

from collections.abc import Iterable, Mapping, Sequence
from decimal import ROUND_CEILING, Decimal

from printshop.config import settings
from printshop.core.config_access import ConfigAccess
from printshop.infra.logging import get_logger
from printshop.schemas.catalog import ComplexityTierOption, MaterialCategory, ProductOptions
from printshop.schemas.pricing import PriceBreakdown, SelectedColor

logger = get_logger(__name__)

DEFAULT_PROFIT_MARGIN = Decimal("40")

_CATEGORY_RANK: dict[str, int] = {"standard": 0, "premium": 1, "ultra": 2}


def _money(value: Decimal | int | float | str) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def selected_colors_only(colors: Iterable[SelectedColor | None]) -> list[SelectedColor]:
    """Drop empty color slots."""
    return [color for color in colors if color is not None and color.name.strip()]


def highest_color_category(colors: Iterable[SelectedColor | None]) -> MaterialCategory:
    """Most expensive category among the selected colors (standard if none)."""
    highest: MaterialCategory = "standard"
    for color in selected_colors_only(colors):
        if _CATEGORY_RANK.get(color.category, 0) > _CATEGORY_RANK[highest]:
            highest = color.category
    return highest


def suggested_price(subtotal: Decimal, profit_margin: Decimal) -> Decimal:
    """Cost-plus retail price, rounded up to the next whole currency unit."""
    multiplier = Decimal("1") + _money(profit_margin) / Decimal("100")
    return (_money(subtotal) * multiplier).to_integral_value(rounding=ROUND_CEILING)


class PricingEngine:
    """Computes itemized prices from business settings.

    The engine is pure: it never touches inventory or persistence and never
    raises for missing configuration. Missing settings or unknown complexity
    tiers contribute 0; the settings involved are reported by
    ``config.fallback_keys``.
    """

    def __init__(
        self,
        config: ConfigAccess,
        complexity_tiers: Iterable[ComplexityTierOption] | Mapping[str, Decimal] = (),
        customization_fee: Decimal | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Business settings snapshot
            complexity_tiers: Tier rows or a tier -> fee mapping
            customization_fee: Flat personalization fee (defaults to app config)
        """
        self.config = config
        if isinstance(complexity_tiers, Mapping):
            self._complexity_fees = {k: _money(v) for k, v in complexity_tiers.items()}
        else:
            self._complexity_fees = {t.tier: _money(t.fee) for t in complexity_tiers}
        self._customization_fee = (
            _money(customization_fee) if customization_fee is not None else settings.customization_fee
        )

    def material_upcharge(self, category: str) -> Decimal:
        if category == "standard":
            return Decimal("0")
        return self.config.number(f"material_{category}_upcharge")

    def size_upcharge(self, size: str) -> Decimal:
        return self.config.number(f"size_{size}_upcharge")

    def color_upcharge(self, colors: Sequence[SelectedColor | None]) -> Decimal:
        total = Decimal("0")
        for color in selected_colors_only(colors):
            if color.category == "premium":
                total += self.config.number("color_premium_upcharge")
            elif color.category == "ultra":
                total += self.config.number("color_ultra_upcharge")
        return total

    def ams_fee(self, color_count: int) -> Decimal:
        """Multi-color hardware fee; a single color is free."""
        if color_count <= 1:
            return Decimal("0")
        base = self.config.number("ams_base_fee")
        per_color = self.config.number("ams_per_color_fee")
        return base + (color_count - 1) * per_color

    def complexity_fee(self, tier: str | None) -> Decimal:
        if tier is None:
            return Decimal("0")
        fee = self._complexity_fees.get(tier)
        if fee is None:
            logger.debug("Unknown complexity tier priced as zero", tier=tier)
            return Decimal("0")
        return fee

    def customization_fee(self, is_customizable: bool, customization_text: str | None) -> Decimal:
        if is_customizable and customization_text and customization_text.strip():
            return self._customization_fee
        return Decimal("0")

    def price(
        self,
        base_price: Decimal | int | float | str,
        material_category: str = "standard",
        size: str = "small",
        selected_colors: Sequence[SelectedColor | None] = (),
        complexity_tier: str | None = None,
        is_customizable: bool = False,
        customization_text: str | None = None,
        profit_margin_percent: Decimal | int | float | str = DEFAULT_PROFIT_MARGIN,
        shipping: Decimal | int | float | str = 0,
    ) -> PriceBreakdown:
        """Price one unit.

        Args:
            base_price: Catalog base price
            material_category: standard, premium or ultra
            size: small, medium or large
            selected_colors: One entry per color slot; None for empty slots
            complexity_tier: simple, medium, complex or None
            is_customizable: Whether the product accepts personalization
            customization_text: Customer-supplied personalization text
            profit_margin_percent: Margin used for the suggested price
            shipping: Shipping cost to add on top of the subtotal

        Returns:
            PriceBreakdown with every component itemized
        """
        base = _money(base_price)
        margin = _money(profit_margin_percent)
        shipping_cost = _money(shipping)
        colors = selected_colors_only(selected_colors)

        material = self.material_upcharge(material_category)
        size_fee = self.size_upcharge(size)
        color_fee = self.color_upcharge(colors)
        ams = self.ams_fee(len(colors))
        complexity = self.complexity_fee(complexity_tier)
        customization = self.customization_fee(is_customizable, customization_text)

        subtotal = base + material + size_fee + color_fee + ams + complexity + customization

        return PriceBreakdown(
            base_price=base,
            material_upcharge=material,
            size_upcharge=size_fee,
            color_upcharge=color_fee,
            ams_fee=ams,
            complexity_fee=complexity,
            customization_fee=customization,
            subtotal=subtotal,
            shipping=shipping_cost,
            total=subtotal + shipping_cost,
            profit_margin=margin,
            suggested_price=suggested_price(subtotal, margin),
        )

    def profit_margin(self) -> Decimal:
        """Configured back-office margin, or the application default."""
        return self.config.number("profit_margin", default=settings.default_profit_margin)

    def price_product(
        self,
        product: ProductOptions,
        material_category: str,
        size: str,
        selected_colors: Sequence[SelectedColor | None],
        customization_text: str | None = None,
        shipping: Decimal | int | float | str = 0,
    ) -> PriceBreakdown:
        """Price a catalog product configuration."""
        return self.price(
            base_price=product.price,
            material_category=material_category,
            size=size,
            selected_colors=selected_colors,
            complexity_tier=product.complexity_tier,
            is_customizable=product.is_customizable,
            customization_text=customization_text,
            profit_margin_percent=self.profit_margin(),
            shipping=shipping,
        )

    def unit_price(
        self,
        product: ProductOptions,
        material_category: str,
        size: str,
        selected_colors: Sequence[SelectedColor | None],
        customization_text: str | None = None,
    ) -> Decimal:
        """Price charged per unit in the cart (shipping excluded)."""
        return self.price_product(
            product, material_category, size, selected_colors, customization_text
        ).subtotal
