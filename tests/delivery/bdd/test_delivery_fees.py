"""BDD tests for delivery fee quotes."""

import pytest
from delivery.exceptions import DeliveryUnavailable
from delivery.fees import calculate_delivery_fee
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/delivery_fees.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('delivery is quoted to "{postal_code}"'), target_fixture="quote")
def _(cart, postal_code, error):
    try:
        return calculate_delivery_fee(cart, postal_code, seed=1)
    except DeliveryUnavailable as exc:
        error["exc"] = exc
        return None


@when(parsers.cfparse('rush delivery is quoted to "{postal_code}"'), target_fixture="quote")
def _(cart, postal_code):
    return calculate_delivery_fee(cart, postal_code, is_rush_delivery=True, seed=1)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the delivery total is {amount:f}"))
def _(quote, amount):
    assert quote.total == pytest.approx(amount)


@then("the base rate is waived")
def _(quote):
    assert quote.base_rate == 0


@then(parsers.cfparse("the perishable handling fee is {amount:f}"))
def _(quote, amount):
    assert quote.perishable_handling == pytest.approx(amount)
