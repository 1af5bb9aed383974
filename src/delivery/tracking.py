"""Simulated real-time delivery tracking.

There is no dispatch system behind this: the current stage is drawn at
random and a plausible update history is built backwards from "now". It
exists so tracking pages have something to render and poll.
"""

import random
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from delivery.clock import store_now

REFRESH_INTERVAL_SECONDS = 30
UPDATE_SPACING = timedelta(minutes=30)
ARRIVAL_WINDOW = timedelta(minutes=30)

DELIVERY_STAGES = ("preparing", "picked_up", "in_transit", "out_for_delivery", "delivered")

STAGE_MESSAGES = {
    "preparing": "Your order is being prepared",
    "picked_up": "Order picked up from store",
    "in_transit": "Order is on the way to delivery area",
    "out_for_delivery": "Out for delivery - driver assigned",
    "delivered": "Order delivered successfully",
}

_IN_TRANSIT = DELIVERY_STAGES.index("in_transit")
_OUT_FOR_DELIVERY = DELIVERY_STAGES.index("out_for_delivery")
_DELIVERED = DELIVERY_STAGES.index("delivered")

_HUB_LOCATION = "Miami, FL"
_DRIVER_NAME = "John Smith"
_DRIVER_PHONE = "+1 (555) 123-4567"


def stage_message(stage: str) -> str:
    return STAGE_MESSAGES.get(stage, "Status update")


@dataclass(frozen=True)
class TrackingUpdate:
    timestamp: datetime
    status: str
    message: str
    location: str | None = None


@dataclass(frozen=True)
class TrackingInfo:
    tracking_number: str
    status: str
    updates: list[TrackingUpdate] = field(default_factory=list)
    location: str | None = None
    estimated_arrival: datetime | None = None
    driver_name: str | None = None
    driver_phone: str | None = None

    @property
    def should_refresh(self) -> bool:
        """Polling clients keep refreshing until the order is delivered."""
        return self.status != "delivered"


class TrackingSimulator:
    def __init__(self, rng: random.Random | None = None, clock: Callable[[], datetime] = store_now):
        self.rng = rng or random.Random()
        self.clock = clock

    def track(self, tracking_number: str) -> TrackingInfo:
        now = self.clock()
        current = self.rng.randrange(len(DELIVERY_STAGES))

        updates = [
            TrackingUpdate(
                timestamp=now - UPDATE_SPACING * (current - index),
                status=DELIVERY_STAGES[index],
                message=stage_message(DELIVERY_STAGES[index]),
                location=_HUB_LOCATION if index >= _IN_TRANSIT else None,
            )
            for index in range(current + 1)
        ]

        driver_assigned = current >= _OUT_FOR_DELIVERY
        return TrackingInfo(
            tracking_number=tracking_number,
            status=DELIVERY_STAGES[current],
            updates=updates,
            location=_HUB_LOCATION if current >= _IN_TRANSIT else None,
            estimated_arrival=now + ARRIVAL_WINDOW if current < _DELIVERED else None,
            driver_name=_DRIVER_NAME if driver_assigned else None,
            driver_phone=_DRIVER_PHONE if driver_assigned else None,
        )
