import pytest
from storefront.api import ApiError
from storefront.models import OrderStatus
from storefront.navigation import LOGIN_PATH
from storefront.orders import ORDER_SUCCESS_PATH


def _messages(toasts):
    return [t.message for t in toasts.toasts]


@pytest.fixture
def filled_cart(cart, scarf, gift_card, red):
    cart.add_item(scarf, 2, red)
    cart.add_item(gift_card, 1)
    return cart


@pytest.fixture
def home(shopper, address_book, address_form):
    return address_book.add_address({**address_form, "is_default": True, "tag": "Home"})


@pytest.fixture
def placed_order(home, filled_cart, checkout):
    return checkout.submit()


class TestSubmit:
    def test_signed_out_is_sent_to_login(self, checkout, filled_cart, navigator, toasts):
        assert checkout.submit() is None

        assert navigator.current_path == LOGIN_PATH
        assert navigator.state == {"from": "/checkout"}
        assert _messages(toasts) == ["Please log in first"]

    def test_empty_cart(self, shopper, home, checkout, toasts):
        assert checkout.submit() is None
        assert _messages(toasts)[-1] == "Your cart is empty"

    def test_no_address(self, shopper, filled_cart, checkout, toasts):
        assert checkout.submit() is None
        assert _messages(toasts)[-1] == "Please select a shipping address"
        assert not filled_cart.is_empty

    def test_places_order_and_clears_cart(self, placed_order, filled_cart, navigator, toasts, home):
        assert placed_order.status == OrderStatus.PENDING
        assert placed_order.total_price == 3060.0
        assert placed_order.address.id == home.id
        scarf_line = next(item for item in placed_order.items if item.product_id == "p-1001")
        assert scarf_line.selected_specs["color"].label == "Red"
        assert filled_cart.is_empty
        assert navigator.current_path == ORDER_SUCCESS_PATH
        assert navigator.state == {"order_no": placed_order.order_no}
        assert _messages(toasts)[-1] == "Order submitted"

    def test_uses_selected_address(self, home, address_book, address_form, filled_cart, checkout):
        office = address_book.add_address({**address_form, "detail": "文一西路 969 号", "tag": "Office"})
        checkout.select_address(office.id)

        order = checkout.submit()

        assert order.address.tag == "Office"

    def test_deleted_selection_falls_back_to_default(self, home, address_book, address_form, checkout):
        office = address_book.add_address({**address_form, "detail": "文一西路 969 号"})
        checkout.select_address(office.id)
        address_book.delete_address(office.id)

        assert checkout.selected_address.id == home.id

    def test_server_rejection_keeps_the_cart(self, home, filled_cart, checkout, api, toasts):
        api.client.session.sign_in("not-a-token", api.client.session.user)

        assert checkout.submit() is None
        assert not filled_cart.is_empty
        assert _messages(toasts)[-1] == "Invalid or expired token"


class TestOrderClient:
    def test_mismatched_total_is_rejected(self, home, filled_cart, orders):
        with pytest.raises(ApiError) as exc:
            orders.create_order(filled_cart.items, home, 1.0)

        assert exc.value.status_code == 400
        assert "does not match" in exc.value.message

    def test_pay(self, placed_order, orders, toasts):
        paid = orders.pay_order(placed_order.id)

        assert paid.status == OrderStatus.PAID
        assert paid.paid_at is not None
        assert _messages(toasts)[-1] == "Payment successful"

    def test_cancelled_order_cannot_be_paid(self, placed_order, orders, toasts):
        orders.cancel_order(placed_order.id)

        with pytest.raises(ApiError) as exc:
            orders.pay_order(placed_order.id)

        assert exc.value.status_code == 400
        assert _messages(toasts)[-1] == "Cannot transition from cancelled to paid"
        assert orders.get_order(placed_order.id).status == OrderStatus.CANCELLED

    def test_request_cancel_asks_first(self, placed_order, orders, confirms):
        cancelled = []
        orders.request_cancel(placed_order.id, on_cancelled=cancelled.append)

        request = confirms.current
        assert (request.title, request.confirm_text, request.cancel_text) == (
            "Cancel order",
            "Confirm cancel",
            "Let me think",
        )
        assert orders.get_order(placed_order.id).status == OrderStatus.PENDING

        confirms.confirm()

        assert cancelled[0].status == OrderStatus.CANCELLED
        assert cancelled[0].cancelled_at is not None

    def test_request_cancel_dismissed(self, placed_order, orders, confirms):
        orders.request_cancel(placed_order.id)
        confirms.cancel()

        assert orders.get_order(placed_order.id).status == OrderStatus.PENDING

    def test_rejected_cancel_is_reported_by_toast(self, placed_order, orders, confirms, toasts):
        orders.cancel_order(placed_order.id)
        cancelled = []

        orders.request_cancel(placed_order.id, on_cancelled=cancelled.append)
        confirms.confirm()

        assert cancelled == []
        assert _messages(toasts)[-1] == "Cannot transition from cancelled to cancelled"

    def test_unknown_order_is_none(self, shopper, orders):
        assert orders.get_order("missing") is None

    def test_list_filters_by_status(self, home, cart, scarf, blue, checkout, orders):
        cart.add_item(scarf, 1, blue)
        first = checkout.submit()
        cart.add_item(scarf, 1, blue)
        second = checkout.submit()
        orders.pay_order(second.id)

        assert {o.id for o in orders.list_orders()} == {first.id, second.id}
        assert [o.id for o in orders.list_orders("all")] == [o.id for o in orders.list_orders()]
        assert [o.id for o in orders.list_orders(OrderStatus.PAID)] == [second.id]
        assert [o.id for o in orders.list_orders("pending")] == [first.id]
        assert orders.list_orders("shipped") == []

    def test_request_cancel_needs_confirm_service(self, api, toasts):
        from storefront.orders import OrderClient

        with pytest.raises(RuntimeError):
            OrderClient(api, toasts).request_cancel("o-1")
