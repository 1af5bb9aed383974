"""Delivery booking domain events."""

from protean.fields import DateTime, Float, Identifier, String

from delivery.domain import delivery


@delivery.event(part_of="DeliveryBooking")
class DeliveryScheduled:
    """A delivery window was confirmed for an order."""

    __version__ = 1

    booking_id = Identifier(required=True)
    order_id = Identifier(required=True)
    slot_id = String(required=True)
    slot_start = DateTime(required=True)
    tracking_number = String(required=True)
    delivery_fee = Float(required=True)
    scheduled_at = DateTime(required=True)
