"""Typed read-only access to business settings.

Settings are a flat key -> JSON value mapping maintained from the
back-office. A missing or unusable value never raises: the caller's
default is returned and the key is recorded as a fallback so the
degradation stays observable.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from printshop.infra.logging import get_logger

logger = get_logger(__name__)


class ConfigAccess:
    """Lookup over a snapshot of business settings.

    Example:
        config = ConfigAccess({"delivery_fee": 5, "delivery_areas": ["Cumming, GA"]})
        config.number("delivery_fee")        # Decimal("5")
        config.number("shipping_fee")        # Decimal("0"), recorded as fallback
        config.fallback_keys                 # ("shipping_fee",)
    """

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})
        self._fallbacks: dict[str, None] = {}

    @classmethod
    def from_rows(cls, rows: Iterable[Any]) -> "ConfigAccess":
        """Build from setting rows (ORM objects or dicts with key/value)."""
        values: dict[str, Any] = {}
        for row in rows:
            if isinstance(row, Mapping):
                values[row["key"]] = row.get("value")
            else:
                values[row.key] = row.value
        return cls(values)

    def _fallback(self, key: str, default: Any, reason: str) -> Any:
        self._fallbacks.setdefault(key, None)
        logger.debug("Setting fell back to default", key=key, reason=reason, default=str(default))
        return default

    def number(self, key: str, default: Decimal | int | str = 0) -> Decimal:
        """Numeric setting as Decimal."""
        fallback = Decimal(str(default))
        value = self._values.get(key)
        if value is None or isinstance(value, bool):
            return self._fallback(key, fallback, "missing")
        try:
            number = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return self._fallback(key, fallback, "not_numeric")
        if not number.is_finite():
            return self._fallback(key, fallback, "not_numeric")
        return number

    def text(self, key: str, default: str = "") -> str:
        value = self._values.get(key)
        if value is None:
            return self._fallback(key, default, "missing")
        if isinstance(value, (list, dict)):
            return self._fallback(key, default, "not_text")
        return str(value)

    def string_list(self, key: str, default: Iterable[str] = ()) -> list[str]:
        value = self._values.get(key)
        if isinstance(value, list):
            return [str(item) for item in value if item is not None]
        reason = "missing" if value is None else "not_list"
        return self._fallback(key, list(default), reason)

    def flag(self, key: str, default: bool = False) -> bool:
        value = self._values.get(key)
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        reason = "missing" if value is None else "not_bool"
        return self._fallback(key, default, reason)

    @property
    def fallback_keys(self) -> tuple[str, ...]:
        """Keys that resolved to a default, in first-seen order."""
        return tuple(self._fallbacks)

    @property
    def fallback_count(self) -> int:
        return len(self._fallbacks)

    def reset_diagnostics(self) -> None:
        self._fallbacks.clear()
