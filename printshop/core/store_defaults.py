"""Store defaults - initial business settings, materials and complexity tiers.

Loaded from ``config/store_defaults.yaml`` and used to seed a fresh
database. After seeding, the database is the source of truth; this file
is never consulted at request time.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from printshop.config import settings
from printshop.infra.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MaterialDefault:
    """A filament material to seed."""

    name: str
    category: str = "standard"
    cost_per_gram: Decimal = Decimal("0")
    upcharge: Decimal = Decimal("0")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MaterialDefault":
        """Create from dictionary."""
        return cls(
            name=data["name"],
            category=data.get("category", "standard"),
            cost_per_gram=Decimal(str(data.get("cost_per_gram", 0))),
            upcharge=Decimal(str(data.get("upcharge", 0))),
        )


@dataclass(frozen=True)
class ColorDefault:
    """A filament color to seed, linked to a material by name."""

    name: str
    hex_color: str
    material: str
    stock_quantity: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ColorDefault":
        """Create from dictionary."""
        return cls(
            name=data["name"],
            hex_color=data.get("hex_color", "#000000"),
            material=data.get("material", ""),
            stock_quantity=data.get("stock_quantity"),
        )


@dataclass(frozen=True)
class ComplexityDefault:
    """A complexity tier to seed."""

    tier: str
    fee: Decimal
    description: str | None = None
    min_time_minutes: int | None = None
    max_time_minutes: int | None = None
    help_text: str | None = None

    @classmethod
    def from_dict(cls, tier: str, data: dict[str, Any]) -> "ComplexityDefault":
        """Create from dictionary."""
        return cls(
            tier=tier,
            fee=Decimal(str(data.get("fee", 0))),
            description=data.get("description"),
            min_time_minutes=data.get("min_time_minutes"),
            max_time_minutes=data.get("max_time_minutes"),
            help_text=data.get("help_text"),
        )


@dataclass(frozen=True)
class StoreDefaults:
    """Everything needed to bootstrap a store."""

    version: str
    settings: dict[str, Any] = field(default_factory=dict)
    materials: tuple[MaterialDefault, ...] = ()
    colors: tuple[ColorDefault, ...] = ()
    complexity_tiers: tuple[ComplexityDefault, ...] = ()

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "StoreDefaults":
        """Parse YAML content into StoreDefaults.

        Raises:
            ValueError: If the document is not a mapping
        """
        data = yaml.safe_load(yaml_content) or {}
        if not isinstance(data, dict):
            raise ValueError("Store defaults must be a YAML mapping")

        return cls(
            version=str(data.get("version", "0.0.0")),
            settings=dict(data.get("settings") or {}),
            materials=tuple(MaterialDefault.from_dict(m) for m in data.get("materials") or []),
            colors=tuple(ColorDefault.from_dict(c) for c in data.get("colors") or []),
            complexity_tiers=tuple(
                ComplexityDefault.from_dict(tier, tier_data)
                for tier, tier_data in (data.get("complexity_tiers") or {}).items()
            ),
        )


def load_store_defaults(path: str | Path | None = None) -> StoreDefaults:
    """Load store defaults from a YAML file.

    Raises:
        FileNotFoundError: If no defaults file exists at any search path
    """
    search_paths = (
        [Path(path)]
        if path
        else [
            Path(settings.store_defaults_path),
            Path(__file__).parent.parent.parent / settings.store_defaults_path,
        ]
    )

    for candidate in search_paths:
        if candidate.exists():
            logger.info("Loading store defaults", path=str(candidate))
            defaults = StoreDefaults.from_yaml(candidate.read_text())
            logger.info(
                "Store defaults loaded",
                version=defaults.version,
                settings=len(defaults.settings),
                materials=len(defaults.materials),
                colors=len(defaults.colors),
            )
            return defaults

    raise FileNotFoundError(f"Store defaults not found: {[str(p) for p in search_paths]}")
