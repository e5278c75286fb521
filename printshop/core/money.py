"""Currency display helpers."""

from decimal import ROUND_HALF_UP, Decimal

from printshop.core.config_access import ConfigAccess

DEFAULT_CURRENCY_SYMBOL = "$"

_CENTS = Decimal("0.01")


def currency_symbol(config: ConfigAccess) -> str:
    return config.text("business_currency_symbol", default=DEFAULT_CURRENCY_SYMBOL) or DEFAULT_CURRENCY_SYMBOL


def format_money(amount: Decimal | int | str, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Two-decimal display string, e.g. ``format_money(Decimal("17.5"))`` -> "$17.50"."""
    value = Decimal(str(amount)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    if value < 0:
        return f"-{symbol}{-value:,.2f}"
    return f"{symbol}{value:,.2f}"
