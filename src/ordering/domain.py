"""Ordering bounded context: orders, their status history and payment.

Orders are placed from a checked-out cart, move through a closed status
state machine, and keep an append-only tracking history that customers see
on the order page.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
