"""Application tests for status updates, cancellation and tracking notes."""

import json

import pytest
from ordering.order.creation import PlaceOrder
from ordering.order.order import Order
from ordering.order.status import AddTrackingNote, CancelOrder, UpdateOrderStatus
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

ADDRESS = json.dumps({"address1": "1 Ocean Dr", "city": "Miami Beach", "zip_code": "33139", "country": "US"})


def _place_order():
    return current_domain.process(
        PlaceOrder(
            user_id="user-010",
            items=json.dumps([{"product_id": "p1", "product_name": "Avocados", "quantity": 4, "unit_price": 1.25}]),
            billing_address=ADDRESS,
            shipping_address=ADDRESS,
            payment_method=json.dumps({"method_type": "paypal"}),
            shipping_method=json.dumps({"option_id": "express", "name": "Express Delivery"}),
        ),
        asynchronous=False,
    )


def _update(order_id, status, **kwargs):
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=status, **kwargs), asynchronous=False)


def _get(order_id):
    return current_domain.repository_for(Order).get(order_id)


class TestUpdateOrderStatus:
    def test_status_change_is_persisted(self):
        order_id = _place_order()
        _update(order_id, "confirmed")
        _update(order_id, "shipped", tracking_number="ZAP1772450100000QRST", location="Miami hub")

        order = _get(order_id)
        assert order.status == "shipped"
        assert order.tracking_number == "ZAP1772450100000QRST"
        history = order.public_history()
        assert [entry.status for entry in history] == ["pending", "confirmed", "shipped"]
        assert history[-1].location == "Miami hub"

    def test_illegal_move_leaves_order_untouched(self):
        order_id = _place_order()
        _update(order_id, "delivered")

        with pytest.raises(ValidationError):
            _update(order_id, "pending")

        order = _get(order_id)
        assert order.status == "delivered"
        assert len(order.public_history()) == 2

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            _update("missing-order", "confirmed")


class TestCancelOrder:
    def test_cancel_records_reason(self):
        order_id = _place_order()
        current_domain.process(CancelOrder(order_id=order_id, reason="Duplicate order"), asynchronous=False)

        order = _get(order_id)
        assert order.status == "cancelled"
        assert order.public_history()[-1].message == "Order cancelled: Duplicate order"


class TestAddTrackingNote:
    def test_internal_note(self):
        order_id = _place_order()
        current_domain.process(AddTrackingNote(order_id=order_id, message="Fragile items"), asynchronous=False)

        order = _get(order_id)
        assert len(order.tracking_entries) == 2
        assert len(order.public_history()) == 1

    def test_public_note(self):
        order_id = _place_order()
        current_domain.process(
            AddTrackingNote(order_id=order_id, message="Driver is 5 minutes away", is_public=True),
            asynchronous=False,
        )
        assert _get(order_id).public_history()[-1].message == "Driver is 5 minutes away"
