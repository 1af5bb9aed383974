"""Delivery scheduling: command and handler.

Confirms the delivery window picked at checkout. The slot is re-validated
from its identifier (date and hour are encoded in it) and rejected once its
start time has passed or when the slot grid never offered it. The fee is
priced again from the cart, and a tracking number is minted for the booking.
"""

import json
import secrets
import string
import time as _time
from datetime import datetime, time, timedelta

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from delivery.booking.booking import DeliveryBooking, DeliverySchedule
from delivery.cart import CartItem
from delivery.clock import store_now
from delivery.domain import delivery, logger
from delivery.exceptions import DeliveryUnavailable
from delivery.fees import calculate_delivery_fee
from delivery.slots import SLOT_HOURS, DeliverySlot, is_offered_slot, is_perishable_compatible, parse_slot_id
from delivery.zones import ShippingOption, get_catalog

IMMEDIATE_SLOT_ID = "immediate"
TRACKING_PREFIX = "ZAP"

_TRACKING_ALPHABET = string.ascii_uppercase + string.digits


def generate_tracking_number() -> str:
    suffix = "".join(secrets.choice(_TRACKING_ALPHABET) for _ in range(4))
    return f"{TRACKING_PREFIX}{int(_time.time() * 1000)}{suffix}"


def immediate_slot(now: datetime | None = None) -> DeliverySlot:
    """The implicit window used by tiers that need no scheduling."""
    now = now or store_now()
    return DeliverySlot(
        id=IMMEDIATE_SLOT_ID,
        start_time=now,
        end_time=now + timedelta(hours=SLOT_HOURS),
        is_available=True,
        capacity=1,
        booked=0,
        price=0.0,
        perishable_compatible=True,
    )


def validate_delivery_slot(slot_id: str, now: datetime | None = None) -> DeliverySlot | None:
    """Rebuild a slot from its id.

    Returns ``None`` when the window has already started, lies beyond the
    booking horizon or falls off the hourly grid slots are offered on.
    """
    now = now or store_now()
    if slot_id == IMMEDIATE_SLOT_ID:
        return immediate_slot(now)

    _, day, hour = parse_slot_id(slot_id)
    start = datetime.combine(day, time(hour), tzinfo=now.tzinfo)
    if start <= now or not is_offered_slot(day, hour, now):
        return None

    # TODO: read capacity and bookings from a persisted slot reservation
    return DeliverySlot(
        id=slot_id,
        start_time=start,
        end_time=start + timedelta(hours=SLOT_HOURS),
        is_available=True,
        capacity=10,
        booked=3,
        price=1.99,
        perishable_compatible=is_perishable_compatible(hour),
    )


def build_delivery_schedule(
    option: ShippingOption,
    slot: DeliverySlot | None = None,
    special_instructions: str | None = None,
    contactless_delivery: bool = False,
    requires_signature: bool = False,
    now: datetime | None = None,
) -> DeliverySchedule:
    if option.requires_scheduling and (slot is None or slot.id == IMMEDIATE_SLOT_ID):
        raise ValidationError({"slot_id": ["Select a delivery time"]})

    slot = slot or immediate_slot(now)
    return DeliverySchedule(
        delivery_date=slot.start_time.date(),
        slot_id=slot.id,
        slot_start=slot.start_time,
        slot_end=slot.end_time,
        special_instructions=special_instructions,
        contactless_delivery=contactless_delivery,
        requires_signature=requires_signature,
    )


@delivery.command(part_of="DeliveryBooking")
class ScheduleDelivery:
    order_id = Identifier(required=True)
    postal_code = String(required=True, max_length=20)
    shipping_option_id = String(required=True, max_length=50)
    items = Text(required=True)  # JSON: list of cart item dicts
    slot_id = String(max_length=100)
    is_rush_delivery = Boolean(default=False)
    special_instructions = Text()
    contactless_delivery = Boolean(default=False)
    requires_signature = Boolean(default=False)


@delivery.command_handler(part_of=DeliveryBooking)
class SchedulingHandler:
    @handle(ScheduleDelivery)
    def schedule_delivery(self, command):
        catalog = get_catalog()
        zone = catalog.get_delivery_zone(command.postal_code)
        option = catalog.get_shipping_option(command.shipping_option_id)
        if zone is None or option is None:
            raise DeliveryUnavailable(postal_code=command.postal_code)

        slot = None
        if command.slot_id:
            slot = validate_delivery_slot(command.slot_id)
            if slot is None or (command.slot_id != IMMEDIATE_SLOT_ID and parse_slot_id(command.slot_id)[0] != zone.id):
                logger.info(
                    "Delivery slot rejected",
                    order_id=str(command.order_id),
                    slot_id=command.slot_id,
                )
                raise ValidationError({"slot_id": ["Selected delivery slot is no longer available"]})

        schedule = build_delivery_schedule(
            option,
            slot,
            special_instructions=command.special_instructions,
            contactless_delivery=bool(command.contactless_delivery),
            requires_signature=bool(command.requires_signature),
        )
        items = command.items if isinstance(command.items, list) else json.loads(command.items)
        fee = calculate_delivery_fee(
            [CartItem.from_dict(item) for item in items],
            command.postal_code,
            shipping_option_id=option.id,
            is_rush_delivery=bool(command.is_rush_delivery),
        )

        booking = DeliveryBooking.schedule_for(
            order_id=command.order_id,
            zone_id=zone.id,
            shipping_option_id=option.id,
            schedule=schedule,
            delivery_fee=fee.total,
            tracking_number=generate_tracking_number(),
        )
        current_domain.repository_for(DeliveryBooking).add(booking)

        logger.info(
            "Delivery scheduled",
            order_id=str(command.order_id),
            slot_id=schedule.slot_id,
            delivery_fee=fee.total,
            tracking_number=booking.tracking_number,
        )
        return {
            "booking_id": str(booking.id),
            "tracking_number": booking.tracking_number,
            "delivery_fee": booking.delivery_fee,
        }
