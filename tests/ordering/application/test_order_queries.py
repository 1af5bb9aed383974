"""Application tests for the order repository queries and the status dashboard."""

import json
from datetime import UTC, datetime, timedelta

from ordering.order.creation import PlaceOrder
from ordering.order.order import Order
from ordering.order.status import UpdateOrderStatus
from ordering.projections.orders_by_status import OrdersByStatus, status_counts
from protean import current_domain

ADDRESS = json.dumps({"address1": "1 Main St", "city": "Miami", "zip_code": "33101", "country": "US"})


def _place_order(user_id="user-q", product_name="Sourdough Loaf"):
    return current_domain.process(
        PlaceOrder(
            user_id=user_id,
            items=json.dumps([{"product_id": "p1", "product_name": product_name, "quantity": 1, "unit_price": 6.0}]),
            billing_address=ADDRESS,
            shipping_address=ADDRESS,
            payment_method=json.dumps({"method_type": "card"}),
            shipping_method=json.dumps({"option_id": "standard", "name": "Standard Delivery"}),
        ),
        asynchronous=False,
    )


def _repo():
    return current_domain.repository_for(Order)


class TestFindByUser:
    def test_newest_first(self):
        older = _place_order(user_id="user-newest")
        newer = _place_order(user_id="user-newest")

        order = _repo().get(older)
        order.created_at = datetime.now(UTC) - timedelta(days=3)
        _repo().add(order)

        ids = [str(o.id) for o in _repo().find_by_user("user-newest")]
        assert ids == [newer, older]

    def test_limit(self):
        for _ in range(3):
            _place_order(user_id="user-limit")
        assert len(_repo().find_by_user("user-limit", limit=2)) == 2

    def test_other_users_are_excluded(self):
        _place_order(user_id="user-a")
        assert _repo().find_by_user("user-nobody") == []


class TestFindByStatus:
    def test_filters_by_status(self):
        order_id = _place_order(user_id="user-status")
        current_domain.process(UpdateOrderStatus(order_id=order_id, status="packed"), asynchronous=False)

        packed = [str(o.id) for o in _repo().find_by_status("packed")]
        assert order_id in packed
        assert all(o.status == "packed" for o in _repo().find_by_status("packed"))


class TestFindByOrderNumber:
    def test_lookup(self):
        order = _repo().get(_place_order())
        assert _repo().find_by_order_number(order.order_number).id == order.id
        assert _repo().find_by_order_number("ORD-00000000-000") is None


class TestSearch:
    def test_matches_product_name_case_insensitively(self):
        order_id = _place_order(product_name="Manchego Cheese")
        assert order_id in [str(o.id) for o in _repo().search("manchego")]

    def test_matches_order_number(self):
        order = _repo().get(_place_order())
        assert [str(o.id) for o in _repo().search(order.order_number)] == [str(order.id)]

    def test_blank_term(self):
        assert _repo().search("  ") == []


class TestTrackingHistory:
    def test_public_entries_oldest_first(self):
        order_id = _place_order()
        current_domain.process(UpdateOrderStatus(order_id=order_id, status="confirmed"), asynchronous=False)
        assert [entry.status for entry in _repo().tracking_history(order_id)] == ["pending", "confirmed"]


class TestStatusDashboard:
    def test_projection_follows_status(self):
        order_id = _place_order()
        current_domain.process(UpdateOrderStatus(order_id=order_id, status="confirmed"), asynchronous=False)

        record = current_domain.repository_for(OrdersByStatus).get(order_id)
        assert record.status == "confirmed"
        assert record.total == 6.48

    def test_counts_are_zero_filled(self):
        before = status_counts()
        order_id = _place_order()
        current_domain.process(UpdateOrderStatus(order_id=order_id, status="shipped"), asynchronous=False)

        after = status_counts()
        assert set(after) == {
            "pending",
            "confirmed",
            "processing",
            "packed",
            "shipped",
            "out_for_delivery",
            "delivered",
            "cancelled",
            "refunded",
        }
        assert after["shipped"] == before["shipped"] + 1
        assert after["pending"] == before["pending"]
