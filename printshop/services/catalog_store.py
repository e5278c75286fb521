"""Catalog store - products, colors and complexity tiers.

Rows are converted to typed schemas here so nothing downstream sees raw
JSON columns.
"""

from abc import ABC, abstractmethod

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from printshop.infra.logging import get_logger
from printshop.models import Color, ComplexitySetting, Material, Product
from printshop.schemas.catalog import (
    MATERIAL_CATEGORIES,
    ColorOption,
    ComplexityTierOption,
    MaterialOption,
    ProductOptions,
)

logger = get_logger(__name__)


class CatalogStore(ABC):
    """Read access to the product catalog."""

    @abstractmethod
    async def get_product(self, product_id: str) -> ProductOptions | None:
        ...

    @abstractmethod
    async def list_colors(self) -> list[ColorOption]:
        """Active colors with their price category resolved."""

    @abstractmethod
    async def list_materials(self) -> list[MaterialOption]:
        ...

    @abstractmethod
    async def list_complexity_tiers(self) -> list[ComplexityTierOption]:
        ...

    async def colors_by_name(self) -> dict[str, ColorOption]:
        return {color.name: color for color in await self.list_colors()}


def color_option(row: Color) -> ColorOption:
    """A color's category is its material's; colors without one are standard."""
    category = row.material.category if row.material is not None else "standard"
    if category not in MATERIAL_CATEGORIES:
        logger.warning("Unknown material category, pricing as standard", color=row.name, category=category)
        category = "standard"
    return ColorOption(
        name=row.name,
        hex_color=row.hex_color,
        category=category,
        stock_quantity=row.stock_quantity,
    )


class SqlCatalogStore(CatalogStore):
    """CatalogStore over an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_product(self, product_id: str) -> ProductOptions | None:
        row = await self.session.get(Product, product_id)
        if row is None or not row.is_active:
            return None
        return ProductOptions.model_validate(row)

    async def list_colors(self) -> list[ColorOption]:
        result = await self.session.execute(
            select(Color).where(Color.is_active.is_(True)).order_by(Color.name)
        )
        return [color_option(row) for row in result.scalars().all()]

    async def list_materials(self) -> list[MaterialOption]:
        result = await self.session.execute(
            select(Material).where(Material.is_active.is_(True)).order_by(Material.name)
        )
        return [MaterialOption.model_validate(row) for row in result.scalars().all()]

    async def list_complexity_tiers(self) -> list[ComplexityTierOption]:
        result = await self.session.execute(select(ComplexitySetting))
        return [ComplexityTierOption.model_validate(row) for row in result.scalars().all()]
