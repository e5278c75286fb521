"""Pricing endpoints: storefront quotes and the back-office calculator."""

from collections.abc import Sequence

from fastapi import APIRouter, HTTPException, status

from printshop.api.deps import Catalog, SettingsSource
from printshop.core.catalog_options import color_swatches, resolve_colors
from printshop.core.config_access import ConfigAccess
from printshop.core.money import currency_symbol, format_money
from printshop.core.pricing_engine import PricingEngine, highest_color_category
from printshop.infra.logging import get_logger
from printshop.schemas.catalog import ColorSwatches, MaterialOption
from printshop.schemas.pricing import (
    CalculatorRequest,
    PriceBreakdown,
    PricingDiagnostics,
    ProductQuoteRequest,
    QuoteResponse,
    SelectedColor,
)

router = APIRouter()
logger = get_logger(__name__)


def quote_response(
    breakdown: PriceBreakdown,
    config: ConfigAccess,
    colors: Sequence[SelectedColor | None] = (),
) -> QuoteResponse:
    symbol = currency_symbol(config)
    if config.fallback_count:
        logger.info("Priced with defaulted settings", settings=list(config.fallback_keys))
    return QuoteResponse(
        breakdown=breakdown,
        diagnostics=PricingDiagnostics(
            defaulted_settings=list(config.fallback_keys),
            defaulted_count=config.fallback_count,
        ),
        currency_symbol=symbol,
        display_total=format_money(breakdown.total, symbol),
        color_category=highest_color_category(colors),
    )


@router.post("/quote", response_model=QuoteResponse)
async def quote_product(
    request: ProductQuoteRequest,
    catalog: Catalog,
    settings_store: SettingsSource,
) -> QuoteResponse:
    """Price a product configuration as the shopper builds it."""
    product = await catalog.get_product(request.product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")

    config = await settings_store.load()
    engine = PricingEngine(config, await catalog.list_complexity_tiers())
    colors = resolve_colors(request.colors, await catalog.colors_by_name())
    breakdown = engine.price_product(
        product,
        request.material,
        request.size,
        colors,
        request.customization_text,
    )
    return quote_response(breakdown, config, colors)


@router.post("/calculator", response_model=QuoteResponse)
async def calculate(
    request: CalculatorRequest,
    catalog: Catalog,
    settings_store: SettingsSource,
) -> QuoteResponse:
    """Cost-plus calculator; margin defaults to the profit_margin setting."""
    config = await settings_store.load()
    engine = PricingEngine(config, await catalog.list_complexity_tiers())
    margin = request.profit_margin if request.profit_margin is not None else engine.profit_margin()
    breakdown = engine.price(
        base_price=request.base_price,
        material_category=request.material_category,
        size=request.size,
        selected_colors=request.colors,
        complexity_tier=request.complexity_tier,
        is_customizable=request.is_customizable,
        customization_text=request.customization_text,
        profit_margin_percent=margin,
    )
    return quote_response(breakdown, config, request.colors)


@router.get("/products/{product_id}/colors", response_model=ColorSwatches)
async def product_colors(product_id: str, catalog: Catalog) -> ColorSwatches:
    """Product colors by category; out-of-stock colors are disabled."""
    product = await catalog.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return color_swatches(product, await catalog.list_colors())


@router.get("/materials", response_model=list[MaterialOption])
async def list_materials(catalog: Catalog) -> list[MaterialOption]:
    """Active filament materials with their price category."""
    return await catalog.list_materials()
