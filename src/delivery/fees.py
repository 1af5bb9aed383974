"""Delivery fee calculation.

The fee is the zone base rate plus the shipping tier price, with fixed
surcharges for perishable handling and rush delivery. Orders at or above the
zone's free-delivery threshold have the base portion waived; surcharges are
still charged.
"""

from dataclasses import dataclass, field
from datetime import datetime

from delivery.cart import CartItem, cart_subtotal, has_perishables
from delivery.domain import logger
from delivery.exceptions import DeliveryUnavailable
from delivery.slots import DeliverySlot, get_available_delivery_slots
from delivery.zones import STANDARD_OPTION_ID, ZoneCatalog, get_catalog

PERISHABLE_HANDLING_FEE = 2.99
RUSH_DELIVERY_FEE = 4.99


@dataclass(frozen=True)
class DeliveryCalculation:
    base_rate: float
    distance_rate: float
    perishable_handling: float
    rush_delivery: float
    total: float
    estimated_time: str
    available_slots: list[DeliverySlot] = field(default_factory=list)

    @property
    def is_free(self) -> bool:
        return self.total == 0


def calculate_delivery_fee(
    items: list[CartItem],
    postal_code: str,
    shipping_option_id: str = STANDARD_OPTION_ID,
    is_rush_delivery: bool = False,
    catalog: ZoneCatalog | None = None,
    now: datetime | None = None,
    seed: int | None = None,
) -> DeliveryCalculation:
    catalog = catalog or get_catalog()
    zone = catalog.get_delivery_zone(postal_code)
    option = catalog.get_shipping_option(shipping_option_id)
    if zone is None or option is None:
        logger.info(
            "Delivery not available",
            postal_code=postal_code,
            shipping_option_id=shipping_option_id,
        )
        raise DeliveryUnavailable(postal_code=postal_code)

    base_rate = zone.base_rate + option.base_price
    distance_rate = 0.0
    perishable_handling = 0.0
    rush_delivery = 0.0

    perishables = has_perishables(items)
    if perishables and zone.perishable_handling:
        perishable_handling = PERISHABLE_HANDLING_FEE

    if is_rush_delivery and zone.rush_delivery_available:
        rush_delivery = RUSH_DELIVERY_FEE

    if cart_subtotal(items) >= zone.free_delivery_threshold:
        base_rate = 0.0

    total = round(base_rate + distance_rate + perishable_handling + rush_delivery, 2)

    return DeliveryCalculation(
        base_rate=round(base_rate, 2),
        distance_rate=distance_rate,
        perishable_handling=perishable_handling,
        rush_delivery=rush_delivery,
        total=total,
        estimated_time=option.estimated_time,
        available_slots=get_available_delivery_slots(zone.id, option.id, perishables, now=now, seed=seed),
    )
