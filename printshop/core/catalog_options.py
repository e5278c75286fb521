"""Catalog option rules: color availability and selection validation.

Stock is only ever checked here, before a color reaches the pricing engine.
Orders never decrement stock.
"""

from collections.abc import Mapping, Sequence

from printshop.config import settings
from printshop.schemas.catalog import ColorOption, ColorSwatch, ColorSwatches, ProductOptions
from printshop.schemas.pricing import SelectedColor


class CartValidationError(ValueError):
    """Raised when a product configuration cannot be added to a cart."""


def is_out_of_stock(color: ColorOption, threshold: int | None = None) -> bool:
    """A color is out of stock when it has less than ``threshold`` grams left."""
    limit = settings.out_of_stock_threshold if threshold is None else threshold
    return color.stock_quantity < limit


def color_swatches(product: ProductOptions, colors: Sequence[ColorOption]) -> ColorSwatches:
    """Group the product's colors by category.

    Out-of-stock colors stay in the list with ``disabled=True`` so the
    shopper sees them greyed out instead of missing.
    """
    offered = set(product.colors)
    swatches = ColorSwatches()
    for color in colors:
        if color.name not in offered:
            continue
        getattr(swatches, color.category).append(
            ColorSwatch(
                name=color.name,
                hex_color=color.hex_color,
                category=color.category,
                stock_quantity=color.stock_quantity,
                disabled=is_out_of_stock(color),
            )
        )
    return swatches


def resolve_colors(
    names: Sequence[str | None],
    colors: Mapping[str, ColorOption],
) -> list[SelectedColor | None]:
    """Map selected color names to priced colors, keeping empty slots as None.

    Unknown names are priced as standard.
    """
    resolved: list[SelectedColor | None] = []
    for name in names:
        if not name or not name.strip():
            resolved.append(None)
            continue
        option = colors.get(name)
        resolved.append(SelectedColor(name=name, category=option.category if option else "standard"))
    return resolved


def validate_selection(
    product: ProductOptions,
    material: str,
    size: str,
    color_names: Sequence[str | None],
    colors: Mapping[str, ColorOption],
    customization_text: str | None = None,
) -> None:
    """Check a shopper's configuration against the product options.

    Raises:
        CartValidationError: On a disallowed material or size, an unknown,
            unoffered or out-of-stock color, too many colors for the
            product's slots, or missing text on a customizable product.
    """
    if material not in product.allowed_materials:
        raise CartValidationError(f"Material '{material}' is not available for this product")
    if size not in product.allowed_sizes:
        raise CartValidationError(f"Size '{size}' is not available for this product")

    chosen = [name for name in color_names if name and name.strip()]
    if product.color_slots and len(color_names) > len(product.color_slots):
        raise CartValidationError(
            f"Product has {len(product.color_slots)} color slots, got {len(color_names)} selections"
        )
    for name in chosen:
        if product.colors and name not in product.colors:
            raise CartValidationError(f"Color '{name}' is not offered for this product")
        option = colors.get(name)
        if option is None:
            raise CartValidationError(f"Unknown color '{name}'")
        if is_out_of_stock(option):
            raise CartValidationError(f"Color '{name}' is out of stock")

    if product.is_customizable and not (customization_text and customization_text.strip()):
        raise CartValidationError("Customization text is required for this product")
