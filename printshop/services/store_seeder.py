"""Seed a fresh database from store defaults.

Existing rows are left alone unless ``overwrite`` is set, so re-running
the seed never clobbers back-office edits.
"""

from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from printshop.core.store_defaults import StoreDefaults
from printshop.infra.logging import get_logger
from printshop.models import Base, Color, ComplexitySetting, Material, Setting

logger = get_logger(__name__)


@dataclass
class SeedReport:
    settings: int = 0
    materials: int = 0
    colors: int = 0
    complexity_tiers: int = 0


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created", tables=sorted(Base.metadata.tables))


async def seed_store(session: AsyncSession, defaults: StoreDefaults, overwrite: bool = False) -> SeedReport:
    """Insert default settings, materials, colors and complexity tiers.

    Returns:
        Counts of rows written per table
    """
    report = SeedReport()

    existing_settings = {row.key for row in (await session.execute(select(Setting))).scalars()}
    for key, value in defaults.settings.items():
        if key in existing_settings and not overwrite:
            continue
        await session.merge(Setting(key=key, value=value))
        report.settings += 1

    materials = {row.name: row for row in (await session.execute(select(Material))).scalars()}
    for material in defaults.materials:
        if material.name in materials:
            continue
        row = Material(
            name=material.name,
            category=material.category,
            cost_per_gram=material.cost_per_gram,
            upcharge=material.upcharge,
        )
        session.add(row)
        materials[material.name] = row
        report.materials += 1
    await session.flush()

    color_names = {row.name for row in (await session.execute(select(Color))).scalars()}
    for color in defaults.colors:
        if color.name in color_names:
            continue
        material_row = materials.get(color.material)
        if material_row is None:
            logger.warning("Color references unknown material", color=color.name, material=color.material)
        session.add(
            Color(
                name=color.name,
                hex_color=color.hex_color,
                material_id=material_row.id if material_row else None,
                stock_quantity=color.stock_quantity,
            )
        )
        report.colors += 1

    tiers = {row.tier for row in (await session.execute(select(ComplexitySetting))).scalars()}
    for tier in defaults.complexity_tiers:
        if tier.tier in tiers:
            continue
        session.add(
            ComplexitySetting(
                tier=tier.tier,
                fee=tier.fee,
                description=tier.description,
                min_time_minutes=tier.min_time_minutes,
                max_time_minutes=tier.max_time_minutes,
                help_text=tier.help_text,
            )
        )
        report.complexity_tiers += 1

    await session.commit()
    logger.info(
        "Store seeded",
        version=defaults.version,
        settings=report.settings,
        materials=report.materials,
        colors=report.colors,
        complexity_tiers=report.complexity_tiers,
    )
    return report
