"""Order payment: commands and handler.

Payment runs through the gateway port: an intent is opened for the order
total, confirmed once the customer authorises it, and refunded on request.
A declined confirmation leaves the order where it was.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order, OrderStatus
from payments.gateway import get_gateway, to_minor_units

PAYMENT_CONFIRMED_MESSAGE = "Payment received, order confirmed"


@ordering.command(part_of="Order")
class StartPayment:
    order_id = Identifier(required=True)
    customer_id = Identifier()


@ordering.command(part_of="Order")
class ConfirmPayment:
    order_id = Identifier(required=True)


@ordering.command(part_of="Order")
class RefundOrder:
    order_id = Identifier(required=True)
    amount = Float(min_value=0.0)  # Full refund when omitted
    reason = String(max_length=100, default="requested_by_customer")


def _require_intent(order: Order) -> str:
    if not order.payment_intent_id:
        raise ValidationError({"payment": ["No payment has been started for this order"]})
    return order.payment_intent_id


@ordering.command_handler(part_of=Order)
class PaymentHandler:
    @handle(StartPayment)
    def start_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        amount_minor = to_minor_units(order.pricing.total)
        currency = order.pricing.currency.lower()
        intent = get_gateway().create_payment_intent(
            amount_minor,
            currency,
            str(order.id),
            customer_id=str(command.customer_id) if command.customer_id else None,
        )
        order.record_payment_intent(intent.payment_intent_id, amount_minor, currency)
        repo.add(order)

        logger.info(
            "Payment started",
            order_id=str(order.id),
            payment_intent_id=intent.payment_intent_id,
            amount_minor=amount_minor,
        )
        return {
            "payment_intent_id": intent.payment_intent_id,
            "client_secret": intent.client_secret,
            "amount_minor": intent.amount_minor,
            "currency": intent.currency,
        }

    @handle(ConfirmPayment)
    def confirm_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        if OrderStatus(order.status) != OrderStatus.PENDING:
            raise ValidationError({"status": ["Payment can only be confirmed for pending orders"]})

        result = get_gateway().confirm_payment(_require_intent(order))
        if not result.success:
            logger.warning("Payment declined", order_id=str(order.id), reason=result.failure_reason)
            raise ValidationError({"payment": [result.failure_reason or "Payment failed"]})

        order.update_status(OrderStatus.CONFIRMED, message=PAYMENT_CONFIRMED_MESSAGE)
        repo.add(order)
        logger.info("Payment confirmed", order_id=str(order.id))

    @handle(RefundOrder)
    def refund_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        if not order.can_transition_to(OrderStatus.REFUNDED):
            raise ValidationError({"status": [f"Cannot transition from {order.status} to refunded"]})

        amount_minor = to_minor_units(command.amount) if command.amount is not None else None
        if amount_minor is not None and amount_minor > to_minor_units(order.pricing.total):
            raise ValidationError({"refund": ["Refund amount cannot exceed the order total"]})

        result = get_gateway().create_refund(
            _require_intent(order),
            amount_minor=amount_minor,
            reason=command.reason or "requested_by_customer",
        )
        if not result.success:
            logger.warning("Refund failed", order_id=str(order.id), reason=result.failure_reason)
            raise ValidationError({"refund": [result.failure_reason or "Refund failed"]})

        order.update_status(OrderStatus.REFUNDED)
        repo.add(order)
        logger.info("Order refunded", order_id=str(order.id), refund_id=result.gateway_refund_id)
