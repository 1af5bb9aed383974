"""Application tests for PlaceOrder via domain.process()."""

import json

import pytest
from ordering.order.creation import PlaceOrder
from ordering.order.order import Order
from protean import current_domain
from protean.exceptions import ValidationError

ADDRESS = json.dumps({"address1": "1101 Brickell Ave", "city": "Miami", "zip_code": "33131", "country": "US"})


def _place_order(items=None, **overrides):
    fields = {
        "user_id": "user-001",
        "items": json.dumps(
            items
            if items is not None
            else [
                {"product_id": "prod-001", "product_name": "Organic Bananas", "quantity": 2, "unit_price": 3.49},
                {"product_id": "prod-002", "product_name": "Whole Milk", "quantity": 1, "unit_price": 4.29},
            ]
        ),
        "billing_address": ADDRESS,
        "shipping_address": ADDRESS,
        "payment_method": json.dumps({"method_type": "card", "brand": "visa", "last4": "4242"}),
        "shipping_method": json.dumps({"option_id": "standard", "name": "Standard Delivery", "price": 4.99}),
        "shipping_cost": 4.99,
    }
    fields.update(overrides)
    return current_domain.process(PlaceOrder(**fields), asynchronous=False)


class TestPlaceOrder:
    def test_order_is_persisted_with_totals(self):
        order_id = _place_order()

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == "pending"
        assert len(order.items) == 2
        assert order.pricing.subtotal == pytest.approx(11.27)
        assert order.pricing.tax == 0.9
        assert order.pricing.shipping == 4.99
        assert order.pricing.total == 17.16
        assert order.pricing.currency == "USD"

    def test_initial_tracking_entry_is_persisted(self):
        order = current_domain.repository_for(Order).get(_place_order())
        assert [entry.status for entry in order.public_history()] == ["pending"]

    def test_delivery_schedule_and_notes(self):
        order_id = _place_order(
            delivery_schedule=json.dumps(
                {"delivery_date": "2026-03-04", "slot_id": "zone-1-2026-03-04-13", "start_time": "13:00"}
            ),
            notes="Ring twice",
        )
        order = current_domain.repository_for(Order).get(order_id)
        assert order.delivery_schedule.slot_id == "zone-1-2026-03-04-13"
        assert order.notes == "Ring twice"

    def test_empty_order_is_rejected(self):
        with pytest.raises(ValidationError):
            _place_order(items=[])


GROCERIES = [
    {"product_id": "prod-003", "product_name": "Olive Oil", "quantity": 2, "unit_price": 20.0},
]


class TestPromoCodes:
    def test_fixed_code_discounts_before_tax(self):
        order = current_domain.repository_for(Order).get(_place_order(items=GROCERIES, promo_code="save5"))

        assert order.promo_code == "SAVE5"
        assert order.pricing.discount == 5.0
        assert order.pricing.tax == 2.8
        assert order.pricing.total == 42.79

    def test_free_shipping_code_waives_shipping(self):
        order = current_domain.repository_for(Order).get(_place_order(items=GROCERIES, promo_code="FREESHIP"))

        assert order.pricing.shipping == 0.0
        assert order.pricing.discount == 0.0
        assert order.pricing.total == 43.2

    def test_no_code_means_no_discount(self):
        order = current_domain.repository_for(Order).get(_place_order(items=GROCERIES))
        assert order.promo_code is None
        assert order.pricing.discount == 0.0

    def test_invalid_code_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _place_order(items=GROCERIES, promo_code="FREEMONEY")
        assert exc.value.messages["promo_code"] == ["Invalid promo code"]

    def test_expired_code_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _place_order(items=GROCERIES, promo_code="SUMMER15")
        assert exc.value.messages["promo_code"] == ["Promo code has expired"]

    def test_order_below_minimum_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _place_order(promo_code="SAVE5")
        assert exc.value.messages["promo_code"] == ["Minimum order amount of $30.00 required"]

    def test_welcome_code_is_once_per_customer(self):
        first = current_domain.repository_for(Order).get(
            _place_order(items=GROCERIES, user_id="user-promo-welcome", promo_code="WELCOME10")
        )
        assert first.pricing.discount == 4.0

        with pytest.raises(ValidationError) as exc:
            _place_order(items=GROCERIES, user_id="user-promo-welcome", promo_code="WELCOME10")
        assert exc.value.messages["promo_code"] == ["You have reached the usage limit for this promo code"]

    def test_redemptions_are_counted_per_customer(self):
        _place_order(items=GROCERIES, user_id="user-promo-count", promo_code="SAVE5")
        _place_order(items=GROCERIES, user_id="user-promo-count", promo_code="SAVE5")

        orders = current_domain.repository_for(Order)
        assert orders.count_promo_redemptions("SAVE5", user_id="user-promo-count") == 2
        assert orders.count_promo_redemptions("SAVE5") >= 2
