"""Catalog schemas.

Product option fields arrive from the catalog as loosely-typed JSON columns.
They are validated once here, at the catalog store boundary, so pricing and
scheduling code can rely on typed values with defaults.
"""

from decimal import Decimal
from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

MaterialCategory = Literal["standard", "premium", "ultra"]
Size = Literal["small", "medium", "large"]
ComplexityTier = Literal["simple", "medium", "complex"]

MATERIAL_CATEGORIES: tuple[MaterialCategory, ...] = ("standard", "premium", "ultra")
SIZES: tuple[Size, ...] = ("small", "medium", "large")

# Per-size print duration used when the product has none configured
DEFAULT_PRINT_MINUTES: dict[str, int] = {"small": 60, "medium": 120, "large": 180}

# Stock assumed when a color has no stock_quantity recorded
DEFAULT_STOCK_QUANTITY = 1000


def resolve_print_minutes(
    size: str | None,
    small: int | None,
    medium: int | None,
    large: int | None,
) -> int:
    """Configured print minutes for a size (small when unset), else the size default."""
    size = size or "small"
    configured = {"small": small, "medium": medium, "large": large}.get(size)
    return configured or DEFAULT_PRINT_MINUTES.get(size, DEFAULT_PRINT_MINUTES["small"])


class ColorSlot(BaseModel):
    """A colorable part of a product (e.g. "Base", "Text")."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    label: str = Field(min_length=1)


class ProductOptions(BaseModel):
    """Typed view of a catalog product and its customization options."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    price: Decimal = Field(ge=0)
    is_customizable: bool = False
    personalization_options: str | None = None
    colors: list[str] = Field(default_factory=list)
    allowed_materials: list[MaterialCategory] = Field(default_factory=lambda: ["standard"])
    allowed_sizes: list[Size] = Field(default_factory=lambda: list(SIZES))
    color_slots: list[ColorSlot] = Field(default_factory=list)
    num_colors: int | None = Field(default=None, ge=0)
    complexity_tier: ComplexityTier | None = None
    print_time_small: int | None = Field(default=None, ge=0)
    print_time_medium: int | None = Field(default=None, ge=0)
    print_time_large: int | None = Field(default=None, ge=0)

    @field_validator("colors", "allowed_materials", "allowed_sizes", "color_slots", mode="before")
    @classmethod
    def none_to_default(cls, v: object, info: ValidationInfo) -> object:
        """NULL JSON columns fall back to the field default."""
        if v is None or v == []:
            if info.field_name == "allowed_materials":
                return ["standard"]
            if info.field_name == "allowed_sizes":
                return list(SIZES)
            return []
        return v

    @model_validator(mode="after")
    def derive_color_slots(self) -> "ProductOptions":
        """Products configured only with ``num_colors`` get numbered slots."""
        if not self.color_slots and self.num_colors:
            self.color_slots = [
                ColorSlot(id=f"color-{i}", label=f"Color {i}")
                for i in range(1, self.num_colors + 1)
            ]
        return self

    def print_minutes(self, size: str | None) -> int:
        """Print duration for a size, falling back to the size default."""
        return resolve_print_minutes(
            size, self.print_time_small, self.print_time_medium, self.print_time_large
        )


class MaterialOption(BaseModel):
    """Filament material as exposed by the catalog."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    category: MaterialCategory = "standard"
    cost_per_gram: Decimal = Decimal("0")
    upcharge: Decimal = Decimal("0")
    is_active: bool = True


class ColorOption(BaseModel):
    """Filament color with its resolved price category and stock."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    hex_color: str = "#000000"
    category: MaterialCategory = "standard"
    stock_quantity: int = DEFAULT_STOCK_QUANTITY

    @field_validator("stock_quantity", mode="before")
    @classmethod
    def default_stock(cls, v: int | None) -> int:
        return DEFAULT_STOCK_QUANTITY if v is None else v


class ComplexityTierOption(BaseModel):
    """Complexity tier with its flat fee."""

    model_config = ConfigDict(from_attributes=True)

    tier: ComplexityTier
    fee: Decimal = Decimal("0")
    description: str | None = None
    min_time_minutes: int | None = None
    max_time_minutes: int | None = None
    help_text: str | None = None


class ColorSwatch(BaseModel):
    """A color as presented for selection; out-of-stock swatches are disabled."""

    name: str
    hex_color: str
    category: MaterialCategory
    stock_quantity: int
    disabled: bool


class ColorSwatches(BaseModel):
    """Product colors grouped by price category."""

    standard: list[ColorSwatch] = Field(default_factory=list)
    premium: list[ColorSwatch] = Field(default_factory=list)
    ultra: list[ColorSwatch] = Field(default_factory=list)
