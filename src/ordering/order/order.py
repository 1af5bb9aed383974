"""Order aggregate: the core of the ordering domain.

An order is placed in ``pending`` and advances through a fixed forward
sequence. Every status change appends one public entry to the order's
tracking history; staff may also add notes, public or internal, that keep
the current status.

State Machine:
    pending → confirmed → processing → packed → shipped →
    out_for_delivery → delivered

Forward moves may skip steps but never go back. ``cancelled`` is reachable
from any status before ``delivered``; ``refunded`` from any status except
itself, including ``delivered`` and ``cancelled``. ``refunded`` is terminal.
"""

import random
import time
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    Date,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderStatusChanged, PaymentStarted, TrackingNoteAdded


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    PACKED = "packed"
    SHIPPED = "shipped"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class PaymentMethodType(Enum):
    CARD = "card"
    PAYPAL = "paypal"
    APPLE_PAY = "apple_pay"
    GOOGLE_PAY = "google_pay"
    BANK_TRANSFER = "bank_transfer"


FORWARD_STATUSES = (
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PROCESSING,
    OrderStatus.PACKED,
    OrderStatus.SHIPPED,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
)

SIDE_EXITS = (OrderStatus.CANCELLED, OrderStatus.REFUNDED)


def _build_transitions() -> dict[OrderStatus, set[OrderStatus]]:
    transitions = {}
    for index, status in enumerate(FORWARD_STATUSES):
        allowed = set(FORWARD_STATUSES[index + 1 :])
        if status != OrderStatus.DELIVERED:
            allowed.add(OrderStatus.CANCELLED)
        allowed.add(OrderStatus.REFUNDED)
        transitions[status] = allowed
    transitions[OrderStatus.CANCELLED] = {OrderStatus.REFUNDED}
    transitions[OrderStatus.REFUNDED] = set()  # Terminal
    return transitions


# State machine transition map
_VALID_TRANSITIONS = _build_transitions()

STATUS_MESSAGES = {
    OrderStatus.PENDING: "Order received and awaiting confirmation",
    OrderStatus.CONFIRMED: "Order confirmed and being prepared",
    OrderStatus.PROCESSING: "Order is being processed",
    OrderStatus.PACKED: "Order has been packed and ready for shipment",
    OrderStatus.SHIPPED: "Order has been shipped",
    OrderStatus.OUT_FOR_DELIVERY: "Order is out for delivery",
    OrderStatus.DELIVERED: "Order has been delivered",
    OrderStatus.CANCELLED: "Order has been cancelled",
    OrderStatus.REFUNDED: "Order has been refunded",
}

ORDER_CREATED_MESSAGE = "Order created and awaiting confirmation"

_NOT_TRACKABLE = {OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.REFUNDED}


def parse_status(value) -> OrderStatus:
    """Coerce a status name into ``OrderStatus`` or raise a field error."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError({"status": [f"Unknown order status: {value}"]}) from None


def generate_order_number() -> str:
    """``ORD-`` + last 8 digits of the epoch millis + a 3-digit random suffix."""
    millis = str(int(time.time() * 1000))
    return f"ORD-{millis[-8:]}-{random.randint(0, 999):03d}"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class Address:
    """A billing or shipping address as captured at checkout.

    Snapshotted onto the order; later edits to the customer's address book
    do not change where an order went.
    """

    first_name = String(max_length=100)
    last_name = String(max_length=100)
    company = String(max_length=255)
    address1 = String(required=True, max_length=255)
    address2 = String(max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    phone = String(max_length=30)


@ordering.value_object(part_of="Order")
class PaymentMethodSnapshot:
    method_type = String(required=True, choices=PaymentMethodType)
    provider = String(max_length=50)
    last4 = String(max_length=4)
    brand = String(max_length=50)


@ordering.value_object(part_of="Order")
class ShippingMethodSnapshot:
    """The shipping tier chosen at checkout."""

    option_id = String(required=True, max_length=50)
    name = String(required=True, max_length=100)
    zone_id = String(max_length=50)
    price = Float(default=0.0, min_value=0.0)
    estimated_time = String(max_length=50)


@ordering.value_object(part_of="Order")
class OrderPricing:
    """Financial summary locked at checkout."""

    subtotal = Float(default=0.0)
    tax = Float(default=0.0)
    shipping = Float(default=0.0)
    discount = Float(default=0.0)
    total = Float(default=0.0)
    currency = String(max_length=3, default="USD")


@ordering.value_object(part_of="Order")
class OrderDeliverySchedule:
    delivery_date = Date(required=True)
    slot_id = String(max_length=100)
    start_time = String(max_length=5)  # HH:MM
    end_time = String(max_length=5)  # HH:MM
    delivery_type = String(max_length=20, default="scheduled")
    instructions = Text()


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order", schema_name="order_items")
class OrderItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    product_image = String(max_length=500)
    variant_id = Identifier()
    variant_name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    total_price = Float(required=True, min_value=0.0)
    weight = String(max_length=50)
    sku = String(max_length=50)
    notes = Text()


@ordering.entity(part_of="Order", schema_name="order_tracking")
class TrackingEntry:
    """One line of an order's tracking history. Entries are never edited.

    ``sequence`` orders entries written within the same clock tick.
    """

    status = String(required=True, choices=OrderStatus)
    message = Text(required=True)
    location = String(max_length=255)
    timestamp = DateTime(required=True)
    is_public = Boolean(default=True)
    sequence = Integer(required=True, min_value=1)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate(schema_name="orders")
class Order:
    order_number = String(required=True, max_length=20, unique=True)
    user_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    billing_address = ValueObject(Address)
    shipping_address = ValueObject(Address)
    payment_method = ValueObject(PaymentMethodSnapshot)
    shipping_method = ValueObject(ShippingMethodSnapshot)
    pricing = ValueObject(OrderPricing)
    promo_code = String(max_length=50)
    delivery_schedule = ValueObject(OrderDeliverySchedule)
    notes = Text()
    tracking_number = String(max_length=50)
    estimated_delivery = DateTime()
    actual_delivery = DateTime()
    payment_intent_id = String(max_length=255)
    tracking_entries = HasMany(TrackingEntry)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def order_must_have_items(self):
        if not self.items:
            raise ValidationError({"items": ["Order must contain at least one item"]})

    @invariant.post
    def status_matches_latest_public_entry(self):
        history = self.public_history()
        if history and history[-1].status != self.status:
            raise ValidationError({"status": ["Order status must match its latest tracking entry"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        user_id,
        items_data,
        billing_address,
        shipping_address,
        payment_method,
        shipping_method,
        pricing,
        delivery_schedule=None,
        notes=None,
        promo_code=None,
    ):
        """Place a new order in ``pending`` with its first tracking entry.

        Args:
            user_id: The customer placing the order.
            items_data: List of dicts with product_id, product_name,
                        unit_price, quantity and optional variant/sku/weight.
            billing_address: Dict matching ``Address``.
            shipping_address: Dict matching ``Address``.
            payment_method: Dict matching ``PaymentMethodSnapshot``.
            shipping_method: Dict matching ``ShippingMethodSnapshot``.
            pricing: Dict with subtotal, tax, shipping, discount, total, currency.
            delivery_schedule: Optional dict matching ``OrderDeliverySchedule``.
            promo_code: The redeemed promo code, already validated and priced.
        """
        now = datetime.now(UTC)

        items = [
            OrderItem(
                product_id=item["product_id"],
                product_name=item["product_name"],
                product_image=item.get("product_image"),
                variant_id=item.get("variant_id"),
                variant_name=(f"Variant: {item['variant_id']}" if item.get("variant_id") else None),
                quantity=item["quantity"],
                unit_price=item["unit_price"],
                total_price=round(item["unit_price"] * item["quantity"], 2),
                weight=item.get("weight"),
                sku=item.get("sku"),
                notes=item.get("notes"),
            )
            for item in items_data
        ]

        order = cls(
            order_number=generate_order_number(),
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            items=items,
            billing_address=Address(**billing_address),
            shipping_address=Address(**shipping_address),
            payment_method=PaymentMethodSnapshot(**payment_method),
            shipping_method=ShippingMethodSnapshot(**shipping_method),
            pricing=OrderPricing(**pricing),
            promo_code=promo_code,
            delivery_schedule=OrderDeliverySchedule(**delivery_schedule) if delivery_schedule else None,
            notes=notes,
            tracking_entries=[
                TrackingEntry(
                    status=OrderStatus.PENDING.value,
                    message=ORDER_CREATED_MESSAGE,
                    timestamp=now,
                    is_public=True,
                    sequence=1,
                )
            ],
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order.order_number,
                user_id=str(user_id),
                item_count=sum(item.quantity for item in items),
                total=order.pricing.total,
                currency=order.pricing.currency,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Tracking history
    # -------------------------------------------------------------------
    def public_history(self) -> list[TrackingEntry]:
        """Customer-visible entries, oldest first."""
        return sorted(
            (entry for entry in self.tracking_entries if entry.is_public),
            key=lambda entry: entry.sequence,
        )

    def _append_entry(self, status, message, location=None, is_public=True, timestamp=None):
        entry = TrackingEntry(
            status=status,
            message=message,
            location=location,
            timestamp=timestamp or datetime.now(UTC),
            is_public=is_public,
            sequence=len(self.tracking_entries) + 1,
        )
        self.add_tracking_entries(entry)
        return entry

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def can_transition_to(self, target_status) -> bool:
        return parse_status(target_status) in _VALID_TRANSITIONS[OrderStatus(self.status)]

    def _assert_can_transition(self, target_status: OrderStatus):
        """Validate that the current state allows transition to target."""
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def update_status(
        self,
        status,
        message=None,
        tracking_number=None,
        estimated_delivery=None,
        location=None,
    ):
        """Move the order to ``status`` and record it in the tracking history."""
        target = parse_status(status)
        self._assert_can_transition(target)

        previous = self.status
        message = message or STATUS_MESSAGES[target]
        now = datetime.now(UTC)

        with atomic_change(self):
            self.status = target.value
            if tracking_number:
                self.tracking_number = tracking_number
            if estimated_delivery:
                self.estimated_delivery = estimated_delivery
            if target == OrderStatus.DELIVERED:
                self.actual_delivery = now
            self.updated_at = now
            self._append_entry(target.value, message, location=location, timestamp=now)

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                previous_status=previous,
                status=target.value,
                message=message,
                tracking_number=self.tracking_number,
                changed_at=now,
            )
        )

    def cancel(self, reason):
        self.update_status(OrderStatus.CANCELLED, message=f"Order cancelled: {reason}")

    def add_tracking_note(self, message, location=None, is_public=False):
        """Append a note under the current status without changing it."""
        if not (message or "").strip():
            raise ValidationError({"message": ["Note message is required"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            self._append_entry(self.status, message, location=location, is_public=is_public, timestamp=now)
            self.updated_at = now

        self.raise_(
            TrackingNoteAdded(
                order_id=str(self.id),
                status=self.status,
                message=message,
                location=location,
                is_public=is_public,
                added_at=now,
            )
        )

    def record_payment_intent(self, payment_intent_id, amount_minor, currency):
        """Remember the gateway intent that will settle this order."""
        if OrderStatus(self.status) != OrderStatus.PENDING:
            raise ValidationError({"status": ["Payment can only be started for pending orders"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            self.payment_intent_id = payment_intent_id
            self.updated_at = now

        self.raise_(
            PaymentStarted(
                order_id=str(self.id),
                payment_intent_id=payment_intent_id,
                amount_minor=amount_minor,
                currency=currency,
                started_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Derived affordances
    # -------------------------------------------------------------------
    @property
    def is_trackable(self) -> bool:
        return bool(self.tracking_number) and OrderStatus(self.status) not in _NOT_TRACKABLE

    @property
    def is_reorderable(self) -> bool:
        return OrderStatus(self.status) == OrderStatus.DELIVERED
