"""Product model - catalog entry with its customization options."""

from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, Boolean, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from printshop.models.base import Base, IdMixin, TimestampMixin


class Product(Base, IdMixin, TimestampMixin):
    """Product sold by the shop.

    Option columns (colors, allowed sizes, color slots) are stored as JSON
    and validated into ProductOptions when read by the catalog store.
    """

    __tablename__ = "products"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    is_customizable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    personalization_options: Mapped[str | None] = mapped_column(Text, nullable=True)
    colors: Mapped[list[str] | None] = mapped_column(JSON, nullable=True, default=list)
    allowed_materials: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    allowed_sizes: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    color_slots: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON, nullable=True)
    num_colors: Mapped[int | None] = mapped_column(Integer, nullable=True)
    complexity_tier: Mapped[str | None] = mapped_column(String(20), nullable=True)
    print_time_small: Mapped[int | None] = mapped_column(Integer, nullable=True)
    print_time_medium: Mapped[int | None] = mapped_column(Integer, nullable=True)
    print_time_large: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, title='{self.title}')>"
