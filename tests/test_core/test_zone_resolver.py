"""Tests for delivery zone matching and shipping cost."""

from decimal import Decimal

import pytest

from printshop.core.config_access import ConfigAccess
from printshop.core.zone_resolver import (
    DeliveryZone,
    ZoneResolver,
    promo_applies,
    shipping_cost,
)


class TestDeliveryZone:
    def test_parse_splits_on_first_comma(self):
        zone = DeliveryZone.parse(" Cumming , GA ")
        assert zone.label == "Cumming , GA"
        assert zone.city == "cumming"
        assert zone.state == "georgia"

    def test_abbreviation_matches_full_state_name(self):
        zone = DeliveryZone.parse("Alpharetta, Georgia")
        assert zone.matches("Alpharetta", "GA") is True
        assert zone.matches("alpharetta", "Geo") is True
        assert zone.matches("ALPHARETTA", "georgia") is True

    def test_full_name_matches_abbreviated_zone(self):
        zone = DeliveryZone.parse("Cumming, GA")
        assert zone.matches("Cumming", "Georgia") is True
        assert zone.matches("Cumming", "Ga.") is True
        assert zone.matches("Cumming", "FL") is False

    def test_prefix_matching_is_symmetric(self):
        short = DeliveryZone.parse("Alpharetta, G")
        long = DeliveryZone.parse("Alpharetta, Georgia")
        assert short.matches("Alpharetta", "Georgia") is True
        assert long.matches("Alpharetta", "G") is True

    def test_city_must_match_exactly(self):
        zone = DeliveryZone.parse("Cumming, GA")
        assert zone.matches("Cummings", "GA") is False
        assert zone.matches("Cum", "GA") is False
        assert zone.matches("", "GA") is False


class TestZoneResolver:
    @pytest.fixture
    def resolver(self) -> ZoneResolver:
        return ZoneResolver(["Alpharetta, GA", "Cumming, GA", ""])

    def test_first_match_wins(self):
        resolver = ZoneResolver(["Cumming, GA", "Cumming, Georgia"])
        assert resolver.resolve("Cumming", "G").label == "Cumming, GA"

    def test_blank_labels_are_ignored(self, resolver: ZoneResolver):
        assert resolver.labels == ["Alpharetta, GA", "Cumming, GA"]

    def test_zone_match_offers_pickup_and_delivery(self, resolver: ZoneResolver):
        options = resolver.fulfillment_options(" alpharetta ", "ga")
        assert options.zone == "Alpharetta, GA"
        assert options.available == ["pickup", "delivery"]
        assert options.default == "pickup"

    def test_outside_zones_forces_shipping(self, resolver: ZoneResolver):
        options = resolver.fulfillment_options("Atlanta", "GA")
        assert options.zone is None
        assert options.available == ["shipping"]
        assert options.default == "shipping"

    def test_short_city_is_incomplete(self, resolver: ZoneResolver):
        options = resolver.fulfillment_options("At", "GA")
        assert options.available == []
        assert options.is_complete is False

    def test_from_config_uses_setting(self):
        resolver = ZoneResolver.from_config(ConfigAccess({"delivery_areas": ["Roswell, GA"]}))
        assert resolver.labels == ["Roswell, GA"]

    def test_from_config_defaults(self):
        config = ConfigAccess({})
        resolver = ZoneResolver.from_config(config)
        assert resolver.labels == ["Alpharetta, GA", "Cumming, GA"]
        assert "delivery_areas" in config.fallback_keys


class TestShippingCost:
    @pytest.fixture
    def config(self) -> ConfigAccess:
        return ConfigAccess({"delivery_fee": 5, "shipping_fee": 8.99, "free_shipping_threshold": 15})

    def test_pickup_is_free(self, config: ConfigAccess):
        assert shipping_cost("pickup", Decimal("1"), config).shipping == Decimal("0")

    def test_delivery_fee(self, config: ConfigAccess):
        assert shipping_cost("delivery", Decimal("100"), config).shipping == Decimal("5")

    def test_delivery_free_with_promo(self, config: ConfigAccess):
        quote = shipping_cost("delivery", Decimal("1"), config, promo_applied=True)
        assert quote.shipping == Decimal("0")
        assert quote.promo_applied is True

    def test_shipping_below_threshold_is_charged(self, config: ConfigAccess):
        assert shipping_cost("shipping", Decimal("14.99"), config).shipping == Decimal("8.99")

    def test_shipping_at_threshold_is_free(self, config: ConfigAccess):
        quote = shipping_cost("shipping", Decimal("15.00"), config)
        assert quote.shipping == Decimal("0")
        assert quote.free_shipping_threshold == Decimal("15")

    def test_unknown_type(self, config: ConfigAccess):
        with pytest.raises(ValueError):
            shipping_cost("teleport", Decimal("1"), config)  # type: ignore[arg-type]


class TestPromo:
    def test_code_is_case_insensitive(self):
        config = ConfigAccess({"free_delivery_promo_code": "FreeDelivery"})
        assert promo_applies(config, " freedelivery ") is True
        assert promo_applies(config, "FREEDELIVERY2") is False

    def test_blank_configured_code_never_matches(self):
        config = ConfigAccess({"free_delivery_promo_code": "", "promo_enabled": False})
        assert promo_applies(config, "") is False
        assert promo_applies(config, "anything") is False

    def test_acknowledgment_applies_while_enabled(self):
        assert promo_applies(ConfigAccess({}), acknowledged=True) is True
        assert promo_applies(ConfigAccess({"promo_enabled": False}), acknowledged=True) is False
