"""Delivery slot generation.

Slots are two-hour windows over the next seven days. Availability, capacity
and bookings are drawn from a seeded random source as a stand-in for a real
reservation system, so nothing here is persisted.
"""

import random
import re
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from protean.exceptions import ValidationError

from delivery.clock import store_now
from delivery.zones import SCHEDULED_OPTION_ID

HORIZON_DAYS = 7
SLOT_HOURS = 2
FIRST_SLOT_HOUR = 9
LAST_SLOT_END_HOUR = 21
MIN_LEAD_HOURS = 2
LATEST_PERISHABLE_HOUR = 18
SCHEDULED_SLOT_PRICE = 1.99
AVAILABILITY_RATE = 0.7

_SLOT_ID_PATTERN = re.compile(r"^(?P<zone_id>.+)-(?P<date>\d{4}-\d{2}-\d{2})-(?P<hour>\d{1,2})$")


@dataclass(frozen=True)
class DeliverySlot:
    id: str
    start_time: datetime
    end_time: datetime
    is_available: bool
    capacity: int
    booked: int
    price: float
    perishable_compatible: bool

    @property
    def remaining(self) -> int:
        return max(self.capacity - self.booked, 0)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "is_available": self.is_available,
            "capacity": self.capacity,
            "booked": self.booked,
            "price": self.price,
            "perishable_compatible": self.perishable_compatible,
        }


def make_slot_id(zone_id: str, day: date, hour: int) -> str:
    return f"{zone_id}-{day.isoformat()}-{hour}"


def parse_slot_id(slot_id: str) -> tuple[str, date, int]:
    """Split a slot id into zone id, calendar date and start hour.

    Zone ids may themselves contain hyphens, so the date and hour are
    matched from the right.
    """
    match = _SLOT_ID_PATTERN.match(slot_id or "")
    if match is None:
        raise ValidationError({"slot_id": ["Invalid delivery slot"]})
    try:
        day = date.fromisoformat(match.group("date"))
    except ValueError:
        raise ValidationError({"slot_id": ["Invalid delivery slot"]}) from None
    hour = int(match.group("hour"))
    if hour > 23:
        raise ValidationError({"slot_id": ["Invalid delivery slot"]})
    return match.group("zone_id"), day, hour


def is_perishable_compatible(hour: int) -> bool:
    return hour <= LATEST_PERISHABLE_HOUR


def slot_start_hours(day_offset: int, now: datetime) -> range:
    """Start hours offered on the day ``day_offset`` days after ``now``."""
    if day_offset == 0:
        return range(max(now.hour + MIN_LEAD_HOURS, FIRST_SLOT_HOUR), LAST_SLOT_END_HOUR, SLOT_HOURS)
    return range(FIRST_SLOT_HOUR, LAST_SLOT_END_HOUR, SLOT_HOURS)


def is_offered_slot(day: date, hour: int, now: datetime) -> bool:
    """Whether the generator would ever offer a window starting at ``hour`` on ``day``."""
    day_offset = (day - now.date()).days
    return 0 <= day_offset < HORIZON_DAYS and hour in slot_start_hours(day_offset, now)


class SlotGenerator:
    """Lazy, restartable sequence of bookable slots for a zone.

    Every call to ``iter()`` replays the same draws from ``seed``, so two
    passes over one generator yield identical slots.
    """

    def __init__(
        self,
        zone_id: str,
        shipping_option_id: str,
        has_perishables: bool = False,
        now: datetime | None = None,
        seed: int | None = None,
    ):
        self.zone_id = zone_id
        self.shipping_option_id = shipping_option_id
        self.has_perishables = has_perishables
        self.now = now or store_now()
        self.seed = seed if seed is not None else random.randrange(2**32)

    def __iter__(self) -> Iterator[DeliverySlot]:
        rng = random.Random(self.seed)
        for slot in self._candidates(rng):
            if not slot.is_available:
                continue
            if self.has_perishables and not slot.perishable_compatible:
                continue
            yield slot

    def _candidates(self, rng: random.Random) -> Iterator[DeliverySlot]:
        price = SCHEDULED_SLOT_PRICE if self.shipping_option_id == SCHEDULED_OPTION_ID else 0.0
        for day_offset in range(HORIZON_DAYS):
            day = self.now.date() + timedelta(days=day_offset)
            for hour in slot_start_hours(day_offset, self.now):
                start = datetime.combine(day, time(hour), tzinfo=self.now.tzinfo)
                available = rng.random() < AVAILABILITY_RATE
                capacity = rng.randint(5, 14)
                booked = rng.randrange(capacity)
                yield DeliverySlot(
                    id=make_slot_id(self.zone_id, day, hour),
                    start_time=start,
                    end_time=start + timedelta(hours=SLOT_HOURS),
                    is_available=available and booked < capacity,
                    capacity=capacity,
                    booked=booked,
                    price=price,
                    perishable_compatible=is_perishable_compatible(hour),
                )


def get_available_delivery_slots(
    zone_id: str,
    shipping_option_id: str,
    has_perishables: bool = False,
    now: datetime | None = None,
    seed: int | None = None,
) -> list[DeliverySlot]:
    return list(SlotGenerator(zone_id, shipping_option_id, has_perishables, now=now, seed=seed))
