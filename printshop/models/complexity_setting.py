"""Complexity tier model - flat fee per print difficulty bucket."""

from decimal import Decimal

from sqlalchemy import Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from printshop.models.base import Base, IdMixin, TimestampMixin


class ComplexitySetting(Base, IdMixin, TimestampMixin):
    """Fee and time range for a complexity tier (simple/medium/complex)."""

    __tablename__ = "complexity_settings"

    tier: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    fee: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    min_time_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_time_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    help_text: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<ComplexitySetting(tier='{self.tier}', fee={self.fee})>"
