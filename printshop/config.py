"""Application configuration using Pydantic Settings.

Reads configuration from environment variables with sensible defaults.
Business rules (fees, upcharges, delivery zones, promo codes) are NOT
configured here: they live in the settings table and are read through
ConfigAccess so the back-office can change them at runtime.
"""

from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Application
    # =========================================================================
    environment: Literal["prod", "staging", "dev"] = Field(
        default="dev",
        description="Environment name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # =========================================================================
    # Database
    # =========================================================================
    db_user: str = Field(
        default="printshop",
        description="Database user",
    )
    db_password: str = Field(
        default="",
        description="Database password",
    )
    db_name: str = Field(
        default="printshop",
        description="Database name",
    )
    db_host: str = Field(
        default="localhost",
        description="Database host",
    )
    db_port: int = Field(
        default=5432,
        description="Database port",
    )
    db_pool_size: int = Field(
        default=5,
        description="Database connection pool size",
    )
    db_pool_max_overflow: int = Field(
        default=10,
        description="Max overflow connections beyond pool size",
    )
    db_url_override: str = Field(
        default="",
        description="Full SQLAlchemy URL, e.g. sqlite+aiosqlite:///./printshop.db",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Build the async database URL.

        An explicit override wins (local SQLite development);
        otherwise a TCP asyncpg URL is assembled from the parts.
        """
        if self.db_url_override:
            return self.db_url_override
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    # =========================================================================
    # Storefront defaults
    # =========================================================================
    default_profit_margin: Decimal = Field(
        default=Decimal("40"),
        ge=0,
        description="Profit margin (%) when the profit_margin setting is missing",
    )
    customization_fee: Decimal = Field(
        default=Decimal("2"),
        ge=0,
        description="Flat fee for customizable products with customer text",
    )
    out_of_stock_threshold: int = Field(
        default=100,
        ge=0,
        description="Colors with less stock (grams) than this are disabled",
    )
    order_number_prefix: str = Field(
        default="PP",
        min_length=1,
        max_length=8,
        description="Prefix for generated order numbers",
    )
    default_delivery_areas: list[str] = Field(
        default=["Alpharetta, GA", "Cumming, GA"],
        description="Delivery zones used when the delivery_areas setting is missing",
    )
    store_defaults_path: str = Field(
        default="config/store_defaults.yaml",
        description="YAML file with initial settings, materials and complexity tiers",
    )

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=True,
        description="Output logs as JSON",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for convenience
settings = get_settings()
