"""Shared BDD fixtures and step definitions for the storefront client."""

import pytest
from pytest_bdd import given, parsers, then
from storefront.catalogue import select_spec


@pytest.fixture()
def catalogue(scarf, gift_card):
    return {product.name: product for product in (scarf, gift_card)}


@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


@pytest.fixture()
def state():
    """Objects created by earlier steps, such as the placed order."""
    return {}


@pytest.fixture()
def add_to_cart(cart, catalogue):
    """Put a product in the cart, choosing each spec's option by its label."""

    def add(quantity, name, option_label=None):
        product = catalogue[name]
        selections = {}
        if option_label:
            for spec in product.specs:
                option = next(o for o in spec.options if o.label == option_label)
                selections = select_spec(selections, spec, option.id)
        return cart.add_item(product, quantity, selections)

    return add


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart")
def empty_cart(cart):
    assert cart.is_empty


@given(parsers.cfparse('the shopper added {quantity:d} "{name}" in "{option}"'))
def added_with_option(add_to_cart, quantity, name, option):
    add_to_cart(quantity, name, option)


@given(parsers.cfparse('the shopper added {quantity:d} "{name}" with no options'))
def added_plain(add_to_cart, quantity, name):
    add_to_cart(quantity, name)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_lines(cart, count):
    assert len(cart.items) == count


@then(parsers.cfparse("the cart holds {quantity:d} items costing {total:f}"))
def cart_totals(cart, quantity, total):
    assert cart.total_quantity == quantity
    assert cart.total_price == pytest.approx(total)


@then(parsers.cfparse('the shopper sees "{message}"'))
def toast_shown(toasts, message):
    assert message in [t.message for t in toasts.toasts]
