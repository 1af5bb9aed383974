"""Tests for Order state machine: valid transitions and invalid transition guards."""

import pytest
from ordering.order.events import OrderStatusChanged
from ordering.order.order import FORWARD_STATUSES, STATUS_MESSAGES, Order, OrderStatus
from protean.exceptions import ValidationError

ADDRESS = {"address1": "1 Ocean Dr", "city": "Miami Beach", "zip_code": "33139", "country": "US"}


def _make_order():
    return Order.create(
        user_id="user-001",
        items_data=[{"product_id": "prod-001", "product_name": "Eggs", "quantity": 1, "unit_price": 5.0}],
        billing_address=ADDRESS,
        shipping_address=ADDRESS,
        payment_method={"method_type": "card"},
        shipping_method={"option_id": "standard", "name": "Standard Delivery"},
        pricing={"subtotal": 5.0, "tax": 0.4, "total": 5.4},
    )


def _order_at_state(status):
    order = _make_order()
    if status != OrderStatus.PENDING:
        order.update_status(status)
    order._events.clear()
    return order


class TestForwardTransitions:
    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (FORWARD_STATUSES[i], FORWARD_STATUSES[j])
            for i in range(len(FORWARD_STATUSES))
            for j in range(i + 1, len(FORWARD_STATUSES))
        ],
    )
    def test_forward_moves_are_allowed(self, current, target):
        order = _order_at_state(current)
        order.update_status(target)
        assert order.status == target.value

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (OrderStatus.CONFIRMED, OrderStatus.PENDING),
            (OrderStatus.SHIPPED, OrderStatus.PACKED),
            (OrderStatus.DELIVERED, OrderStatus.PENDING),
            (OrderStatus.DELIVERED, OrderStatus.OUT_FOR_DELIVERY),
        ],
    )
    def test_backward_moves_are_rejected(self, current, target):
        order = _order_at_state(current)
        with pytest.raises(ValidationError) as exc:
            order.update_status(target)
        assert exc.value.messages["status"] == [f"Cannot transition from {current.value} to {target.value}"]
        assert order.status == current.value

    def test_same_status_is_rejected(self):
        order = _order_at_state(OrderStatus.PROCESSING)
        with pytest.raises(ValidationError):
            order.update_status("processing")

    def test_unknown_status(self):
        order = _make_order()
        with pytest.raises(ValidationError) as exc:
            order.update_status("teleported")
        assert exc.value.messages["status"] == ["Unknown order status: teleported"]


class TestSideExits:
    @pytest.mark.parametrize("current", FORWARD_STATUSES[:-1])
    def test_cancel_before_delivery(self, current):
        order = _order_at_state(current)
        order.cancel("Out of stock")
        assert order.status == "cancelled"
        assert order.public_history()[-1].message == "Order cancelled: Out of stock"

    def test_delivered_order_cannot_be_cancelled(self):
        order = _order_at_state(OrderStatus.DELIVERED)
        with pytest.raises(ValidationError):
            order.cancel("Too late")

    @pytest.mark.parametrize("current", [*FORWARD_STATUSES, OrderStatus.CANCELLED])
    def test_refund_from_any_other_status(self, current):
        order = _order_at_state(current)
        assert order.can_transition_to("refunded")
        order.update_status(OrderStatus.REFUNDED)
        assert order.status == "refunded"

    @pytest.mark.parametrize("target", [*FORWARD_STATUSES, OrderStatus.CANCELLED, OrderStatus.REFUNDED])
    def test_refunded_is_terminal(self, target):
        order = _order_at_state(OrderStatus.REFUNDED)
        assert not order.can_transition_to(target)

    def test_cancelled_order_cannot_resume(self):
        order = _order_at_state(OrderStatus.CANCELLED)
        with pytest.raises(ValidationError):
            order.update_status("processing")


class TestStatusChangedEvent:
    def test_event_carries_default_message(self):
        order = _order_at_state(OrderStatus.CONFIRMED)
        order.update_status("packed")

        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_status == "confirmed"
        assert event.status == "packed"
        assert event.message == STATUS_MESSAGES[OrderStatus.PACKED]

    def test_rejected_move_raises_no_event(self):
        order = _order_at_state(OrderStatus.SHIPPED)
        with pytest.raises(ValidationError):
            order.update_status("confirmed")
        assert order._events == []
