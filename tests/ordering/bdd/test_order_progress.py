"""BDD tests for the order progress tracker."""

from ordering.progress import order_progress
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/order_progress.feature")


@when("the customer opens the progress tracker", target_fixture="steps")
def _(order):
    return {step.status: step for step in order_progress(order)}


@then(parsers.cfparse('the step "{status}" is "{state}"'))
def _(steps, status, state):
    assert steps[status].state.value == state
