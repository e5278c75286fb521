"""Cart item model - a priced product configuration in a shopper session."""

from decimal import Decimal

from sqlalchemy import JSON, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from printshop.models.base import Base, IdMixin, TimestampMixin


class CartItem(Base, IdMixin, TimestampMixin):
    """Cart line owned by an anonymous shopper session."""

    __tablename__ = "cart_items"

    session_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    product_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    selected_material: Mapped[str] = mapped_column(String(20), nullable=False, default="standard")
    selected_size: Mapped[str] = mapped_column(String(20), nullable=False, default="small")
    selected_colors: Mapped[list[str] | None] = mapped_column(JSON, nullable=True, default=list)
    customization_details: Mapped[str | None] = mapped_column(Text, nullable=True)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    def __repr__(self) -> str:
        return f"<CartItem(id={self.id}, product_id={self.product_id}, qty={self.quantity})>"
