"""Material model - filament family driving upcharge category."""

from decimal import Decimal

from sqlalchemy import Boolean, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from printshop.models.base import Base, IdMixin, TimestampMixin


class Material(Base, IdMixin, TimestampMixin):
    """Filament material (PLA, PETG, silk, ...) and its price category."""

    __tablename__ = "materials"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False, default="standard")
    cost_per_gram: Mapped[Decimal] = mapped_column(Numeric(10, 4), nullable=False, default=Decimal("0"))
    upcharge: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<Material(name='{self.name}', category='{self.category}')>"
