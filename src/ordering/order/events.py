"""Domain events for the Order aggregate.

Versioned, immutable facts raised by the Order aggregate. Projections
(such as the admin status dashboard) are kept current from these.
"""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer placed an order at checkout."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    currency = String(default="USD")
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """The order moved to a new lifecycle status."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    message = Text(required=True)
    tracking_number = String()
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class TrackingNoteAdded:
    """A note was appended to the order's tracking history."""

    __version__ = 1

    order_id = Identifier(required=True)
    status = String(required=True)
    message = Text(required=True)
    location = String()
    is_public = Boolean(default=False)
    added_at = DateTime(required=True)


@ordering.event(part_of="Order")
class PaymentStarted:
    """A payment intent was opened for the order total."""

    __version__ = 1

    order_id = Identifier(required=True)
    payment_intent_id = String(required=True)
    amount_minor = Integer(required=True)
    currency = String(required=True)
    started_at = DateTime(required=True)
