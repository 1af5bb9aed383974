"""Shared BDD fixtures and step definitions for the Delivery domain."""

import pytest
from delivery.cart import CartItem
from delivery.exceptions import DeliveryUnavailable
from pytest_bdd import given, parsers, then


@pytest.fixture()
def cart():
    return []


@pytest.fixture()
def error():
    """Container for a captured delivery failure."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a cart with {quantity:d} "{category}" item priced {price:f}'))
@given(parsers.cfparse('a cart with {quantity:d} "{category}" items priced {price:f}'))
def _(cart, quantity, category, price):
    cart.append(
        CartItem(
            product_id=f"prod-{len(cart) + 1}",
            name=f"{category.title()} item",
            category=category,
            price=price,
            quantity=quantity,
        )
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("delivery is reported as unavailable")
def _(error):
    assert isinstance(error["exc"], DeliveryUnavailable)
    assert error["exc"].message == "Delivery not available for this location"
