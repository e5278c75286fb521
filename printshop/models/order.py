"""Order model - one row per physical unit to print."""

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from printshop.models.base import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from printshop.models.product import Product


class Order(Base, IdMixin, TimestampMixin):
    """A single produced item.

    A cart line with quantity 3 yields three rows; rows placed in the same
    checkout share ``checkout_id``. Only ``status`` and ``print_priority``
    change after creation.
    """

    __tablename__ = "orders"

    order_number: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, index=True)
    checkout_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    product_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("products.id", ondelete="SET NULL"),
        nullable=True,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending", index=True)

    customer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(320), nullable=False)
    customer_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    fulfillment_type: Mapped[str] = mapped_column(String(20), nullable=False)
    delivery_location: Mapped[str] = mapped_column(String(200), nullable=False)
    delivery_address: Mapped[str | None] = mapped_column(Text, nullable=True)

    shipping_cost: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    product_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    selected_color: Mapped[str | None] = mapped_column(Text, nullable=True)
    selected_material: Mapped[str | None] = mapped_column(String(20), nullable=True)
    selected_size: Mapped[str | None] = mapped_column(String(20), nullable=True)
    customization_details: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    print_priority: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Relationships
    product: Mapped["Product | None"] = relationship(
        "Product",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Order(order_number='{self.order_number}', status='{self.status}')>"
