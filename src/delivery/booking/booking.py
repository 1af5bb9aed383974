"""DeliveryBooking aggregate: the delivery window chosen at checkout.

A booking ties an order to a zone, a shipping tier and (for scheduled tiers)
a slot, and carries the tracking number minted on confirmation. Slot capacity
is not decremented here; reservations are not yet persisted.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, Date, DateTime, Float, Identifier, String, Text, ValueObject

from delivery.booking.events import DeliveryScheduled
from delivery.domain import delivery


class BookingStatus(Enum):
    SCHEDULED = "Scheduled"


@delivery.value_object(part_of="DeliveryBooking")
class DeliverySchedule:
    """When and how the order should be handed over."""

    delivery_date = Date(required=True)
    slot_id = String(required=True, max_length=100)
    slot_start = DateTime(required=True)
    slot_end = DateTime(required=True)
    special_instructions = Text()
    contactless_delivery = Boolean(default=False)
    requires_signature = Boolean(default=False)

    def to_dict(self) -> dict:
        return {
            "delivery_date": self.delivery_date.isoformat(),
            "slot_id": self.slot_id,
            "slot_start": self.slot_start.isoformat(),
            "slot_end": self.slot_end.isoformat(),
            "special_instructions": self.special_instructions,
            "contactless_delivery": self.contactless_delivery,
            "requires_signature": self.requires_signature,
        }


@delivery.aggregate(schema_name="delivery_bookings")
class DeliveryBooking:
    order_id = Identifier(required=True)
    zone_id = String(required=True, max_length=50)
    shipping_option_id = String(required=True, max_length=50)
    schedule = ValueObject(DeliverySchedule)
    delivery_fee = Float(default=0.0, min_value=0.0)
    tracking_number = String(required=True, max_length=50)
    status = String(choices=BookingStatus, default=BookingStatus.SCHEDULED.value)
    scheduled_at = DateTime()

    @classmethod
    def schedule_for(
        cls,
        order_id: str,
        zone_id: str,
        shipping_option_id: str,
        schedule: DeliverySchedule,
        delivery_fee: float,
        tracking_number: str,
    ):
        now = datetime.now(UTC)
        booking = cls(
            order_id=order_id,
            zone_id=zone_id,
            shipping_option_id=shipping_option_id,
            schedule=schedule,
            delivery_fee=delivery_fee,
            tracking_number=tracking_number,
            scheduled_at=now,
        )
        booking.raise_(
            DeliveryScheduled(
                booking_id=str(booking.id),
                order_id=str(order_id),
                slot_id=schedule.slot_id,
                slot_start=schedule.slot_start,
                tracking_number=tracking_number,
                delivery_fee=delivery_fee,
                scheduled_at=now,
            )
        )
        return booking
