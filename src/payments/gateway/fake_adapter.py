"""Configurable fake payment gateway for development and testing.

No external calls are made. The gateway can be told at runtime to succeed
or fail (see /payments/gateway/configure), and it records every call so
tests can assert on what checkout asked for.
"""

from uuid import uuid4

from payments.gateway.port import PaymentGateway, PaymentIntent, PaymentResult, RefundResult


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_payment_intent(
        self,
        amount_minor: int,
        currency: str,
        order_id: str,
        customer_id: str | None = None,
    ) -> PaymentIntent:
        self.calls.append(
            {
                "method": "create_payment_intent",
                "amount_minor": amount_minor,
                "currency": currency,
                "order_id": order_id,
                "customer_id": customer_id,
            }
        )
        intent_id = f"fake_pi_{uuid4().hex[:12]}"
        return PaymentIntent(
            payment_intent_id=intent_id,
            client_secret=f"{intent_id}_secret_{uuid4().hex[:8]}",
            amount_minor=amount_minor,
            currency=currency.lower(),
        )

    def confirm_payment(self, payment_intent_id: str) -> PaymentResult:
        self.calls.append({"method": "confirm_payment", "payment_intent_id": payment_intent_id})

        if self.should_succeed:
            return PaymentResult(
                success=True,
                payment_intent_id=payment_intent_id,
                gateway_status="succeeded",
            )
        return PaymentResult(
            success=False,
            payment_intent_id=payment_intent_id,
            gateway_status="failed",
            failure_reason=self.failure_reason,
        )

    def create_refund(
        self,
        payment_intent_id: str,
        amount_minor: int | None = None,
        reason: str = "requested_by_customer",
    ) -> RefundResult:
        self.calls.append(
            {
                "method": "create_refund",
                "payment_intent_id": payment_intent_id,
                "amount_minor": amount_minor,
                "reason": reason,
            }
        )

        if self.should_succeed:
            return RefundResult(
                success=True,
                gateway_refund_id=f"fake_ref_{uuid4().hex[:12]}",
                gateway_status="succeeded",
            )
        return RefundResult(
            success=False,
            gateway_status="failed",
            failure_reason=self.failure_reason,
        )

    def verify_webhook_signature(self, payload: str, signature: str) -> bool:  # noqa: ARG002
        return signature == "test-signature"
