"""Zone and shipping-tier catalog.

Zones group postal codes that share delivery economics. Shipping options are
the speed tiers a customer picks at checkout. Both are immutable reference
data; lookups that find nothing return ``None`` or an empty list rather than
raising, so callers decide how to present "delivery unavailable".
"""

from dataclasses import dataclass, field

EXPRESS_OPTION_ID = "express"
STANDARD_OPTION_ID = "standard"
SCHEDULED_OPTION_ID = "scheduled"
NEXT_DAY_OPTION_ID = "next_day"


@dataclass(frozen=True)
class DeliveryZone:
    id: str
    name: str
    postal_codes: frozenset[str]
    base_rate: float
    free_delivery_threshold: float
    max_delivery_minutes: int
    is_active: bool = True
    perishable_handling: bool = False
    rush_delivery_available: bool = False

    def covers(self, postal_code: str) -> bool:
        return self.is_active and postal_code in self.postal_codes


@dataclass(frozen=True)
class ShippingOption:
    id: str
    name: str
    description: str
    base_price: float
    estimated_time: str
    is_default: bool = False
    requires_scheduling: bool = False


DEFAULT_ZONES = (
    DeliveryZone(
        id="zone-1",
        name="Downtown Miami",
        postal_codes=frozenset({"33101", "33102", "33131", "33132"}),
        base_rate=4.99,
        free_delivery_threshold=35.0,
        max_delivery_minutes=60,
        perishable_handling=True,
        rush_delivery_available=True,
    ),
    DeliveryZone(
        id="zone-2",
        name="Miami Beach",
        postal_codes=frozenset({"33139", "33140", "33141"}),
        base_rate=6.99,
        free_delivery_threshold=50.0,
        max_delivery_minutes=90,
        perishable_handling=True,
        rush_delivery_available=True,
    ),
    DeliveryZone(
        id="zone-3",
        name="Coral Gables",
        postal_codes=frozenset({"33134", "33146", "33156"}),
        base_rate=5.99,
        free_delivery_threshold=40.0,
        max_delivery_minutes=75,
        perishable_handling=True,
        rush_delivery_available=False,
    ),
    DeliveryZone(
        id="zone-4",
        name="Aventura",
        postal_codes=frozenset({"33180", "33160"}),
        base_rate=7.99,
        free_delivery_threshold=60.0,
        max_delivery_minutes=120,
        perishable_handling=False,
        rush_delivery_available=False,
    ),
)

DEFAULT_SHIPPING_OPTIONS = (
    ShippingOption(
        id=STANDARD_OPTION_ID,
        name="Standard Delivery",
        description="Delivery within 2-4 hours",
        base_price=0.0,
        estimated_time="2-4 hours",
        is_default=True,
    ),
    ShippingOption(
        id=EXPRESS_OPTION_ID,
        name="Express Delivery",
        description="Delivery within 1-2 hours",
        base_price=3.99,
        estimated_time="1-2 hours",
    ),
    ShippingOption(
        id=SCHEDULED_OPTION_ID,
        name="Scheduled Delivery",
        description="Choose your delivery time",
        base_price=1.99,
        estimated_time="As scheduled",
        requires_scheduling=True,
    ),
    ShippingOption(
        id=NEXT_DAY_OPTION_ID,
        name="Next Day Delivery",
        description="Delivery by tomorrow",
        base_price=2.99,
        estimated_time="Next day",
        requires_scheduling=True,
    ),
)


@dataclass
class ZoneCatalog:
    """Lookup over delivery zones and shipping options."""

    zones: tuple[DeliveryZone, ...] = DEFAULT_ZONES
    shipping_options: tuple[ShippingOption, ...] = field(default=DEFAULT_SHIPPING_OPTIONS)

    def get_delivery_zone(self, postal_code: str | None) -> DeliveryZone | None:
        """Return the first active zone containing the postal code."""
        if not postal_code:
            return None
        code = postal_code.strip()
        return next((zone for zone in self.zones if zone.covers(code)), None)

    def get_zone_by_id(self, zone_id: str) -> DeliveryZone | None:
        return next((zone for zone in self.zones if zone.id == zone_id and zone.is_active), None)

    def get_all_delivery_zones(self) -> list[DeliveryZone]:
        return [zone for zone in self.zones if zone.is_active]

    def is_delivery_available(self, postal_code: str | None) -> bool:
        return self.get_delivery_zone(postal_code) is not None

    def get_shipping_option(self, option_id: str | None) -> ShippingOption | None:
        return next((option for option in self.shipping_options if option.id == option_id), None)

    def get_default_shipping_option(self) -> ShippingOption:
        return next(
            (option for option in self.shipping_options if option.is_default),
            self.shipping_options[0],
        )

    def get_shipping_options(self, postal_code: str | None) -> list[ShippingOption]:
        """Shipping options offered in the postal code's zone.

        Express is withheld from zones without rush delivery.
        """
        zone = self.get_delivery_zone(postal_code)
        if zone is None:
            return []
        return [
            option
            for option in self.shipping_options
            if not (option.id == EXPRESS_OPTION_ID and not zone.rush_delivery_available)
        ]


_catalog = ZoneCatalog()


def get_catalog() -> ZoneCatalog:
    """Return the process-wide zone catalog."""
    return _catalog
