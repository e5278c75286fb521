"""Color model - filament color linked to a material."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from printshop.models.base import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from printshop.models.material import Material


class Color(Base, IdMixin, TimestampMixin):
    """Filament color; its price category comes from the linked material."""

    __tablename__ = "colors"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    hex_color: Mapped[str] = mapped_column(String(9), nullable=False, default="#000000")
    material_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("materials.id", ondelete="SET NULL"),
        nullable=True,
    )
    stock_quantity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    material: Mapped["Material | None"] = relationship(
        "Material",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Color(name='{self.name}', stock={self.stock_quantity})>"
