"""Payment gateway port (abstract interface).

Checkout talks to the card processor in three steps: an intent is created
for the order total, the client confirms it, and a refund may later be
issued against it. Amounts cross this boundary in minor units (cents).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal


def to_minor_units(amount: float) -> int:
    """Convert a major-unit amount (dollars) to minor units (cents)."""
    return int(Decimal(str(amount)).scaleb(2).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class PaymentIntent:
    """A pending charge the client must confirm."""

    payment_intent_id: str
    client_secret: str
    amount_minor: int
    currency: str
    status: str = "requires_confirmation"


@dataclass(frozen=True)
class PaymentResult:
    """Result of confirming a payment intent."""

    success: bool
    payment_intent_id: str | None = None
    gateway_status: str | None = None
    failure_reason: str | None = None


@dataclass(frozen=True)
class RefundResult:
    """Result of a refund attempt."""

    success: bool
    gateway_refund_id: str | None = None
    gateway_status: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_payment_intent(
        self,
        amount_minor: int,
        currency: str,
        order_id: str,
        customer_id: str | None = None,
    ) -> PaymentIntent:
        """Open a payment intent for an order total."""
        ...

    @abstractmethod
    def confirm_payment(self, payment_intent_id: str) -> PaymentResult:
        """Capture a previously created intent."""
        ...

    @abstractmethod
    def create_refund(
        self,
        payment_intent_id: str,
        amount_minor: int | None = None,
        reason: str = "requested_by_customer",
    ) -> RefundResult:
        """Refund a captured payment, in full when no amount is given."""
        ...

    @abstractmethod
    def verify_webhook_signature(
        self,
        payload: str,
        signature: str,
    ) -> bool:
        """Verify that a webhook payload is authentically from the gateway."""
        ...
