"""Delivery zone matching, fulfillment selection and shipping cost.

Zones are configured as "City, State" strings in the ``delivery_areas``
setting. Matching is structural, never fuzzy:

- city parts must be equal after trim + lowercase
- state parts must be equal, or one must be a prefix of the other,
  after US postal abbreviations are expanded ("GA" matches "Georgia")

The first matching zone in list order wins.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from printshop.config import settings
from printshop.core.config_access import ConfigAccess
from printshop.infra.logging import get_logger
from printshop.schemas.fulfillment import FulfillmentOptions, FulfillmentType, ShippingQuote

logger = get_logger(__name__)

# City input must be longer than this before shipping is offered
MIN_CITY_LENGTH = 2


# Postal abbreviations, so "GA" and "Georgia" compare equal
US_STATES: dict[str, str] = {
    "al": "alabama", "ak": "alaska", "az": "arizona", "ar": "arkansas",
    "ca": "california", "co": "colorado", "ct": "connecticut", "de": "delaware",
    "dc": "district of columbia", "fl": "florida", "ga": "georgia", "hi": "hawaii",
    "id": "idaho", "il": "illinois", "in": "indiana", "ia": "iowa",
    "ks": "kansas", "ky": "kentucky", "la": "louisiana", "me": "maine",
    "md": "maryland", "ma": "massachusetts", "mi": "michigan", "mn": "minnesota",
    "ms": "mississippi", "mo": "missouri", "mt": "montana", "ne": "nebraska",
    "nv": "nevada", "nh": "new hampshire", "nj": "new jersey", "nm": "new mexico",
    "ny": "new york", "nc": "north carolina", "nd": "north dakota", "oh": "ohio",
    "ok": "oklahoma", "or": "oregon", "pa": "pennsylvania", "ri": "rhode island",
    "sc": "south carolina", "sd": "south dakota", "tn": "tennessee", "tx": "texas",
    "ut": "utah", "vt": "vermont", "va": "virginia", "wa": "washington",
    "wv": "west virginia", "wi": "wisconsin", "wy": "wyoming",
}


def _normalize(value: str | None) -> str:
    return (value or "").strip().lower()


def _state(value: str | None) -> str:
    state = _normalize(value).rstrip(".")
    return US_STATES.get(state, state)


@dataclass(frozen=True)
class DeliveryZone:
    """A configured zone split into its comparable parts."""

    label: str
    city: str
    state: str

    @classmethod
    def parse(cls, label: str) -> "DeliveryZone":
        """Split "City, State" on the first comma; a label without one is city-only."""
        city, _, state = label.partition(",")
        return cls(label=label.strip(), city=_normalize(city), state=_state(state))

    def matches(self, city: str, state: str) -> bool:
        city, state = _normalize(city), _state(state)
        if not city or city != self.city:
            return False
        return state == self.state or state.startswith(self.state) or self.state.startswith(state)


class ZoneResolver:
    """Matches addresses against the configured delivery zones."""

    def __init__(self, zones: Iterable[str]) -> None:
        self.zones = [DeliveryZone.parse(label) for label in zones if label and label.strip()]

    @classmethod
    def from_config(cls, config: ConfigAccess) -> "ZoneResolver":
        return cls(config.string_list("delivery_areas", default=settings.default_delivery_areas))

    @property
    def labels(self) -> list[str]:
        return [zone.label for zone in self.zones]

    def resolve(self, city: str, state: str) -> DeliveryZone | None:
        """Return the first zone matching the address, or None."""
        for zone in self.zones:
            if zone.matches(city, state):
                return zone
        return None

    def fulfillment_options(self, city: str, state: str) -> FulfillmentOptions:
        """Fulfillment modes for an address.

        Inside a zone pickup (default) and delivery are offered. Outside
        every zone only shipping is offered, once the city is longer than
        two characters; shorter input is treated as incomplete.
        """
        zone = self.resolve(city, state)
        if zone is not None:
            return FulfillmentOptions(zone=zone.label, available=["pickup", "delivery"], default="pickup")
        if len((city or "").strip()) > MIN_CITY_LENGTH:
            return FulfillmentOptions(zone=None, available=["shipping"], default="shipping")
        return FulfillmentOptions()


def promo_applies(config: ConfigAccess, code: str | None = None, acknowledged: bool = False) -> bool:
    """Whether the free-delivery promotion applies.

    Either the entered code equals the configured ``free_delivery_promo_code``
    (case-insensitive, exact) or the shopper self-declared the social
    follow while ``promo_enabled`` is on. The self-declaration is not
    verified. A blank configured code never matches.
    """
    configured = config.text("free_delivery_promo_code").strip().upper()
    if code and configured and code.strip().upper() == configured:
        return True
    if acknowledged and config.flag("promo_enabled", default=True):
        return True
    return False


def shipping_cost(
    fulfillment_type: FulfillmentType,
    subtotal: Decimal,
    config: ConfigAccess,
    promo_applied: bool = False,
) -> ShippingQuote:
    """Shipping cost for a checkout.

    - pickup: always free
    - delivery: free with the promotion, else ``delivery_fee``
    - shipping: free when ``subtotal >= free_shipping_threshold``, else ``shipping_fee``
    """
    if fulfillment_type == "pickup":
        return ShippingQuote(fulfillment_type="pickup", shipping=Decimal("0"))

    if fulfillment_type == "delivery":
        fee = Decimal("0") if promo_applied else config.number("delivery_fee")
        return ShippingQuote(fulfillment_type="delivery", shipping=fee, promo_applied=promo_applied)

    if fulfillment_type == "shipping":
        threshold = config.number("free_shipping_threshold")
        fee = Decimal("0") if subtotal >= threshold else config.number("shipping_fee")
        return ShippingQuote(
            fulfillment_type="shipping",
            shipping=fee,
            free_shipping_threshold=threshold,
        )

    raise ValueError(f"Unknown fulfillment type: {fulfillment_type}")
