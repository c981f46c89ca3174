"""BDD tests for the order status machine."""

from protean.exceptions import ValidationError
from pytest_bdd import scenarios, when

scenarios("features/order_state_machine.feature")


def _attempt(order, action, error):
    try:
        getattr(order, action)()
    except ValidationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the order is paid")
def pay(order, error):
    _attempt(order, "pay", error)


@when("the order is cancelled")
def cancel(order, error):
    _attempt(order, "cancel", error)


@when("the order is delivered")
def deliver(order, error):
    _attempt(order, "deliver", error)
