import re

import pytest
from ordering.order.events import (
    OrderCancelled,
    OrderDelivered,
    OrderPaid,
    OrderPlaced,
    OrderShipped,
)
from ordering.order.order import Order, OrderStatus, generate_order_no
from protean.exceptions import ValidationError


@pytest.fixture
def order(items_data, shipping_address):
    order = Order.place("cust-1", items_data, shipping_address, 3060.0)
    order._events.clear()
    return order


class TestOrderNumber:
    def test_format(self):
        assert re.fullmatch(r"ORD\d{13}[0-9A-F]{6}", generate_order_no())

    def test_numbers_differ(self):
        assert len({generate_order_no() for _ in range(50)}) == 50


class TestPlaceOrder:
    def test_place_creates_pending_order(self, items_data, shipping_address):
        order = Order.place("cust-1", items_data, shipping_address, 3060.0)

        assert order.status == OrderStatus.PENDING.value
        assert order.customer_id == "cust-1"
        assert order.order_no.startswith("ORD")
        assert order.total_price == 3060.0
        assert order.created_at is not None
        assert order.paid_at is None
        assert len(order.items) == 2

    def test_items_keep_price_and_specs(self, items_data, shipping_address):
        order = Order.place("cust-1", items_data, shipping_address, 3060.0)

        scarf = next(i for i in order.items if i.product_id == "p-1001")
        assert scarf.price == 1280.0
        assert scarf.quantity == 2
        assert scarf.subtotal == 2560.0
        assert scarf.specs == {"color": {"id": "red", "label": "Red", "spec_name": "Color"}}

    def test_address_is_captured(self, items_data, shipping_address):
        order = Order.place("cust-1", items_data, shipping_address, 3060.0)

        assert order.address.address_id == "addr-1"
        assert order.address.name == "LinYue"
        assert order.address.district == "西湖区"
        assert order.address.tag == "Home"

    def test_raises_order_placed(self, items_data, shipping_address):
        order = Order.place("cust-1", items_data, shipping_address, 3060.0)

        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.order_no == order.order_no
        assert event.item_count == 3
        assert event.total_price == 3060.0

    def test_items_are_required(self, shipping_address):
        with pytest.raises(ValidationError) as exc:
            Order.place("cust-1", [], shipping_address, 0.0)
        assert exc.value.messages["items"] == ["Order items are required"]

    def test_address_is_required(self, items_data):
        with pytest.raises(ValidationError) as exc:
            Order.place("cust-1", items_data, None, 3060.0)
        assert exc.value.messages["address"] == ["Shipping address is required"]

    def test_total_must_match_items(self, items_data, shipping_address):
        with pytest.raises(ValidationError) as exc:
            Order.place("cust-1", items_data, shipping_address, 100.0)
        assert "total_price" in exc.value.messages

    def test_total_within_a_cent_is_accepted(self, items_data, shipping_address):
        order = Order.place("cust-1", items_data, shipping_address, 3060.005)
        assert order.total_price == pytest.approx(3060.0, abs=0.01)


class TestOrderTransitions:
    def test_pay_pending_order(self, order):
        order.pay()

        assert order.status == OrderStatus.PAID.value
        assert order.paid_at is not None
        assert isinstance(order._events[0], OrderPaid)
        assert order._events[0].amount == 3060.0

    def test_cancel_pending_order(self, order):
        order.cancel()

        assert order.status == OrderStatus.CANCELLED.value
        assert order.cancelled_at is not None
        event = order._events[0]
        assert isinstance(event, OrderCancelled)
        assert event.previous_status == "pending"

    def test_cancel_paid_order(self, order):
        order.pay()
        order.cancel()
        assert order.status == OrderStatus.CANCELLED.value

    def test_full_fulfillment_path(self, order):
        order.pay()
        order.ship()
        order.deliver()

        assert order.status == OrderStatus.DELIVERED.value
        assert order.shipped_at is not None
        assert order.delivered_at is not None
        assert [type(e) for e in order._events] == [OrderPaid, OrderShipped, OrderDelivered]

    @pytest.mark.parametrize("action", ["pay", "cancel", "ship", "deliver"])
    def test_cancelled_order_is_terminal(self, order, action):
        order.cancel()

        with pytest.raises(ValidationError) as exc:
            getattr(order, action)()
        assert "status" in exc.value.messages
        assert order.status == OrderStatus.CANCELLED.value

    def test_cannot_pay_twice(self, order):
        order.pay()
        with pytest.raises(ValidationError):
            order.pay()

    def test_cannot_ship_unpaid_order(self, order):
        with pytest.raises(ValidationError):
            order.ship()

    def test_cannot_cancel_shipped_order(self, order):
        order.pay()
        order.ship()
        with pytest.raises(ValidationError):
            order.cancel()

    def test_ownership(self, order):
        assert order.is_owned_by("cust-1")
        assert not order.is_owned_by("cust-2")
