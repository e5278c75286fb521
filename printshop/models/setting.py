"""Setting model - flat key/value business configuration."""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from printshop.models.base import Base, TimestampMixin


class Setting(Base, TimestampMixin):
    """One business setting (fee, upcharge, zone list, promo code...).

    Keyed by ``key``; writes overwrite (last write wins), no history.
    """

    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)

    def __repr__(self) -> str:
        return f"<Setting(key='{self.key}')>"
