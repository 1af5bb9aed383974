"""Order placement: command and handler."""

import json

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order
from ordering.order.pricing import calculate_order_totals
from ordering.promotions import PromoApplication, validate_promo_code


def _load(value):
    return json.loads(value) if isinstance(value, str) else value


def redeem_promo_code(code: str, user_id: str, items: list[dict]) -> PromoApplication:
    """Validate ``code`` for a cart, counting earlier redemptions from stored orders."""
    orders = current_domain.repository_for(Order)
    code = code.strip().upper()
    return validate_promo_code(
        code,
        order_amount=sum(item["unit_price"] * item["quantity"] for item in items),
        product_ids=[item["product_id"] for item in items],
        times_used=orders.count_promo_redemptions(code),
        times_used_by_customer=orders.count_promo_redemptions(code, user_id=str(user_id)),
    )


@ordering.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of item dicts
    billing_address = Text(required=True)  # JSON: address dict
    shipping_address = Text(required=True)  # JSON: address dict
    payment_method = Text(required=True)  # JSON: payment method dict
    shipping_method = Text(required=True)  # JSON: shipping method dict
    delivery_schedule = Text()  # JSON: delivery schedule dict
    shipping_cost = Float(default=0.0, min_value=0.0)
    promo_code = String(max_length=50)
    currency = String(max_length=3, default="USD")
    notes = Text()


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = _load(command.items)
        shipping_cost = command.shipping_cost or 0.0

        promo = None
        if command.promo_code:
            promo = redeem_promo_code(command.promo_code, command.user_id, items_data)
            if promo.free_shipping:
                shipping_cost = 0.0

        totals = calculate_order_totals(
            items_data,
            shipping_cost=shipping_cost,
            discount=promo.discount if promo else 0.0,
        )

        order = Order.create(
            user_id=command.user_id,
            items_data=items_data,
            billing_address=_load(command.billing_address),
            shipping_address=_load(command.shipping_address),
            payment_method=_load(command.payment_method),
            shipping_method=_load(command.shipping_method),
            pricing={**totals.to_dict(), "currency": command.currency or "USD"},
            delivery_schedule=_load(command.delivery_schedule) if command.delivery_schedule else None,
            notes=command.notes,
            promo_code=promo.code if promo else None,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=order.order_number,
            total=order.pricing.total,
            promo_code=order.promo_code,
        )
        return str(order.id)
