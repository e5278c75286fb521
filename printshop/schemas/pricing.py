"""Pricing request/response schemas."""

from decimal import Decimal

from pydantic import BaseModel, Field, computed_field

from printshop.schemas.catalog import ComplexityTier, MaterialCategory


class SelectedColor(BaseModel):
    """A color chosen for one slot, with the category that drives its upcharge."""

    name: str = Field(min_length=1)
    category: MaterialCategory = "standard"


class PriceBreakdown(BaseModel):
    """Itemized price of one unit.

    ``subtotal`` is the sum of every non-shipping component and
    ``total == subtotal + shipping``.
    """

    base_price: Decimal
    material_upcharge: Decimal = Decimal("0")
    size_upcharge: Decimal = Decimal("0")
    color_upcharge: Decimal = Decimal("0")
    ams_fee: Decimal = Decimal("0")
    complexity_fee: Decimal = Decimal("0")
    customization_fee: Decimal = Decimal("0")
    subtotal: Decimal
    shipping: Decimal = Decimal("0")
    total: Decimal
    profit_margin: Decimal
    suggested_price: Decimal = Field(description="Cost-plus retail estimate, ceil to whole unit")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def profit_amount(self) -> Decimal:
        """Margin earned if the item sells at the suggested price."""
        return self.suggested_price - self.subtotal


class PricingDiagnostics(BaseModel):
    """Settings that were missing and priced as zero/default."""

    defaulted_settings: list[str] = Field(default_factory=list)
    defaulted_count: int = 0


class ProductQuoteRequest(BaseModel):
    """Storefront quote for a catalog product configuration."""

    product_id: str = Field(min_length=1)
    material: MaterialCategory = "standard"
    size: str = "small"
    colors: list[str | None] = Field(
        default_factory=list,
        description="Selected color name per slot; empty slots may be null",
    )
    customization_text: str | None = None


class CalculatorRequest(BaseModel):
    """Back-office cost-plus calculator input."""

    base_price: Decimal = Field(ge=0)
    material_category: MaterialCategory = "standard"
    size: str = "small"
    colors: list[SelectedColor] = Field(default_factory=list)
    complexity_tier: ComplexityTier | None = None
    is_customizable: bool = False
    customization_text: str | None = None
    profit_margin: Decimal | None = Field(default=None, ge=0)


class QuoteResponse(BaseModel):
    """Price breakdown plus configuration diagnostics."""

    breakdown: PriceBreakdown
    diagnostics: PricingDiagnostics
    currency_symbol: str = "$"
    display_total: str
    color_category: MaterialCategory = Field(
        default="standard",
        description="Most expensive category among the selected colors",
    )
