"""Tests for the zone and shipping option catalog."""

import pytest
from delivery.zones import (
    EXPRESS_OPTION_ID,
    STANDARD_OPTION_ID,
    DeliveryZone,
    ZoneCatalog,
    get_catalog,
)


@pytest.fixture()
def catalog():
    return ZoneCatalog()


class TestZoneLookup:
    def test_known_postal_code_resolves_to_its_zone(self, catalog):
        zone = catalog.get_delivery_zone("33131")
        assert zone.id == "zone-1"
        assert zone.name == "Downtown Miami"
        assert zone.base_rate == 4.99
        assert zone.free_delivery_threshold == 35

    def test_surrounding_whitespace_is_ignored(self, catalog):
        assert catalog.get_delivery_zone("  33139 ").id == "zone-2"

    @pytest.mark.parametrize("postal_code", ["32801", "10001", "", None, "3313"])
    def test_uncovered_postal_codes_are_not_found(self, catalog, postal_code):
        assert catalog.get_delivery_zone(postal_code) is None
        assert catalog.is_delivery_available(postal_code) is False

    def test_inactive_zone_is_skipped(self):
        closed = DeliveryZone(
            id="zone-x",
            name="Closed",
            postal_codes=frozenset({"99999"}),
            base_rate=1.0,
            free_delivery_threshold=10,
            max_delivery_minutes=30,
            is_active=False,
        )
        catalog = ZoneCatalog(zones=(closed,))
        assert catalog.get_delivery_zone("99999") is None
        assert catalog.get_zone_by_id("zone-x") is None
        assert catalog.get_all_delivery_zones() == []

    def test_first_matching_zone_wins(self):
        first = DeliveryZone("a", "A", frozenset({"11111"}), 1.0, 10, 30)
        second = DeliveryZone("b", "B", frozenset({"11111"}), 2.0, 10, 30)
        assert ZoneCatalog(zones=(first, second)).get_delivery_zone("11111").id == "a"

    def test_all_default_zones_are_listed(self, catalog):
        assert [zone.id for zone in catalog.get_all_delivery_zones()] == ["zone-1", "zone-2", "zone-3", "zone-4"]

    def test_process_catalog_is_shared(self):
        assert get_catalog() is get_catalog()


class TestShippingOptions:
    def test_default_option_is_standard(self, catalog):
        assert catalog.get_default_shipping_option().id == STANDARD_OPTION_ID

    def test_unknown_option_is_none(self, catalog):
        assert catalog.get_shipping_option("teleport") is None

    def test_rush_zone_offers_express(self, catalog):
        ids = [option.id for option in catalog.get_shipping_options("33131")]
        assert ids == ["standard", "express", "scheduled", "next_day"]

    def test_zone_without_rush_withholds_express(self, catalog):
        ids = [option.id for option in catalog.get_shipping_options("33180")]
        assert EXPRESS_OPTION_ID not in ids
        assert ids == ["standard", "scheduled", "next_day"]

    def test_undeliverable_postal_code_has_no_options(self, catalog):
        assert catalog.get_shipping_options("32801") == []

    def test_scheduling_tiers(self, catalog):
        assert catalog.get_shipping_option("scheduled").requires_scheduling is True
        assert catalog.get_shipping_option("next_day").requires_scheduling is True
        assert catalog.get_shipping_option("standard").requires_scheduling is False
