"""BDD tests for the shopping cart."""

from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when
from storefront.cart import CartStore

scenarios("features/cart.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the shopper adds {quantity:d} "{name}" in "{option}"'))
def add_with_option(add_to_cart, quantity, name, option):
    add_to_cart(quantity, name, option)


@when(parsers.cfparse('the shopper adds {quantity:d} "{name}" without choosing options'))
def add_without_options(add_to_cart, quantity, name, error):
    try:
        add_to_cart(quantity, name)
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse('the shopper sets the "{name}" quantity to {quantity:d}'))
def set_quantity(cart, name, quantity):
    line = next(item for item in cart.items if item.name == name)
    cart.update_quantity(line.uid, quantity)


@when("the storefront is reopened", target_fixture="cart")
def reopen(storage):
    return CartStore(storage)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the cart rejects it with "{message}"'))
def rejected(error, message):
    assert error["exc"] is not None
    assert message in error["exc"].messages["selected_specs"]
