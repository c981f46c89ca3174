"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.order.events import (
    OrderCancelled,
    OrderDelivered,
    OrderPaid,
    OrderPlaced,
    OrderShipped,
)
from ordering.order.order import Order
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

# Map event name strings to classes for dynamic lookup in Then steps
_ORDER_EVENT_CLASSES = {
    "OrderPlaced": OrderPlaced,
    "OrderPaid": OrderPaid,
    "OrderShipped": OrderShipped,
    "OrderDelivered": OrderDelivered,
    "OrderCancelled": OrderCancelled,
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a pending order", target_fixture="order")
def pending_order(items_data, shipping_address):
    order = Order.place("cust-1", items_data, shipping_address, 3060.0)
    order._events.clear()
    return order


@given("the order was paid")
def order_was_paid(order):
    order.pay()
    order._events.clear()


@given("the order was shipped")
def order_was_shipped(order):
    order.ship()
    order._events.clear()


@given("the order was cancelled")
def order_was_cancelled(order):
    order.cancel()
    order._events.clear()


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then(parsers.cfparse('the action fails with a "{field}" error'))
def action_fails(error, field):
    assert isinstance(error["exc"], ValidationError)
    assert field in error["exc"].messages


@then(parsers.cfparse("a {event_type} event is raised"))
def event_raised(order, event_type):
    event_cls = _ORDER_EVENT_CLASSES[event_type]
    assert any(isinstance(e, event_cls) for e in order._events)
