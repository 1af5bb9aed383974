from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from delivery.cart import CartItem


@pytest.fixture(autouse=True)
def _ctx(delivery_bed):
    with delivery_bed.domain_context():
        yield


@pytest.fixture()
def morning():
    """A fixed store-local instant: Monday 2026-03-02 07:15 in Miami."""
    return datetime(2026, 3, 2, 7, 15, tzinfo=ZoneInfo("America/New_York"))


@pytest.fixture()
def pantry_item():
    return CartItem(product_id="prod-rice", name="Basmati Rice", category="pantry", price=12.50)


@pytest.fixture()
def frozen_item():
    return CartItem(product_id="prod-peas", name="Frozen Peas", category="frozen", price=3.49)
