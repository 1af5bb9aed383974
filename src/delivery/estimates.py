"""Arrival estimates for a destination postal code and shipping tier."""

import random
from dataclasses import dataclass
from datetime import datetime, timedelta

from delivery.clock import store_now
from delivery.exceptions import DeliveryUnavailable
from delivery.zones import (
    EXPRESS_OPTION_ID,
    NEXT_DAY_OPTION_ID,
    STANDARD_OPTION_ID,
    ZoneCatalog,
    get_catalog,
)

EXPRESS_MAX_MINUTES = 90
NEXT_DAY_MINUTES = 24 * 60


@dataclass(frozen=True)
class DeliveryEstimate:
    estimated_time: str
    estimated_arrival: datetime
    distance: int | None = None  # miles


def get_delivery_estimate(
    from_postal_code: str,
    to_postal_code: str,
    shipping_option_id: str = STANDARD_OPTION_ID,
    catalog: ZoneCatalog | None = None,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> DeliveryEstimate:
    """Estimate arrival for a delivery into ``to_postal_code``.

    The origin postal code is accepted for API symmetry; distance is a
    placeholder until a routing service is wired in.
    """
    catalog = catalog or get_catalog()
    rng = rng or random.Random()
    option = catalog.get_shipping_option(shipping_option_id)
    zone = catalog.get_delivery_zone(to_postal_code)
    if option is None or zone is None:
        raise DeliveryUnavailable("Unable to calculate delivery estimate", postal_code=to_postal_code)

    minutes = zone.max_delivery_minutes
    if shipping_option_id == EXPRESS_OPTION_ID:
        minutes = min(minutes, EXPRESS_MAX_MINUTES)
    elif shipping_option_id == NEXT_DAY_OPTION_ID:
        minutes = NEXT_DAY_MINUTES

    now = now or store_now()
    return DeliveryEstimate(
        estimated_time=option.estimated_time,
        estimated_arrival=now + timedelta(minutes=minutes),
        distance=rng.randint(5, 24),
    )
