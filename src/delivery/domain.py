"""Delivery bounded context: Zones, Slots, Fees and Delivery Booking.

Answers "can we deliver here, when, and for how much" for a cart, and records
the booking made at checkout. Zone and shipping tier data is static reference
data; only bookings are persisted.
"""

import structlog
from protean.domain import Domain

delivery = Domain(name="delivery")

logger = structlog.get_logger(__name__)
