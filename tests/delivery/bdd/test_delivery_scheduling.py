"""BDD tests for delivery scheduling."""

import json
from datetime import timedelta

from delivery.booking.booking import DeliveryBooking
from delivery.booking.scheduling import ScheduleDelivery
from delivery.clock import store_now
from delivery.exceptions import DeliveryUnavailable
from delivery.slots import make_slot_id
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/delivery_scheduling.feature")

CART = [{"product_id": "prod-001", "name": "Olive Oil", "category": "pantry", "price": 10.0}]


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('a scheduled delivery window {days:d} days ahead at {hour:d} in "{zone_id}"'),
    target_fixture="slot_id",
)
def _(days, hour, zone_id):
    return make_slot_id(zone_id, (store_now() + timedelta(days=days)).date(), hour)


@given(
    parsers.cfparse('a scheduled delivery window {days:d} days ago at {hour:d} in "{zone_id}"'),
    target_fixture="slot_id",
)
def _(days, hour, zone_id):
    return make_slot_id(zone_id, (store_now() - timedelta(days=days)).date(), hour)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the delivery is scheduled to "{postal_code}"'), target_fixture="result")
def _(slot_id, postal_code, error):
    command = ScheduleDelivery(
        order_id="ord-bdd-001",
        postal_code=postal_code,
        shipping_option_id="scheduled",
        items=json.dumps(CART),
        slot_id=slot_id,
    )
    try:
        return current_domain.process(command, asynchronous=False)
    except (ValidationError, DeliveryUnavailable) as exc:
        error["exc"] = exc
        return None


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("a booking is recorded for the window")
def _(result, slot_id):
    booking = current_domain.repository_for(DeliveryBooking).get(result["booking_id"])
    assert booking.schedule.slot_id == slot_id
    assert booking.order_id == "ord-bdd-001"


@then(parsers.cfparse('the tracking number starts with "{prefix}"'))
def _(result, prefix):
    assert result["tracking_number"].startswith(prefix)


@then(parsers.cfparse('the booking is rejected with "{message}"'))
def _(error, message):
    assert isinstance(error["exc"], ValidationError)
    assert error["exc"].messages["slot_id"] == [message]
