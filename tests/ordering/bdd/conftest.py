"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.order.order import Order
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

ADDRESS = {"address1": "1101 Brickell Ave", "city": "Miami", "state": "FL", "zip_code": "33131", "country": "US"}


@pytest.fixture()
def error():
    """Container for a captured validation error."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a pending order", target_fixture="order")
def _():
    order = Order.create(
        user_id="user-bdd-001",
        items_data=[{"product_id": "prod-001", "product_name": "Organic Bananas", "quantity": 2, "unit_price": 3.49}],
        billing_address=ADDRESS,
        shipping_address=ADDRESS,
        payment_method={"method_type": "card"},
        shipping_method={"option_id": "standard", "name": "Standard Delivery"},
        pricing={"subtotal": 6.98, "tax": 0.56, "shipping": 4.99, "total": 12.53},
    )
    order._events.clear()
    return order


@given(parsers.cfparse('the order has moved to "{status}"'))
def _(order, status):
    order.update_status(status)
    order._events.clear()


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def _(order, status):
    assert order.status == status


@then(parsers.cfparse('the change is rejected with "{message}"'))
def _(error, message):
    assert isinstance(error["exc"], ValidationError)
    assert message in error["exc"].messages["status"]
