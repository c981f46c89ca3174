"""Orders: placing them at checkout, paying and cancelling them.

Whether a status change is allowed is the server's call. The client sends
the request and shows whatever error comes back.
"""

import structlog

from storefront.addresses import AddressBook
from storefront.api.endpoints import StorefrontApi
from storefront.api.transport import ApiError
from storefront.cart import CartItem, CartStore
from storefront.models import Address, Order, OrderStatus
from storefront.navigation import LOGIN_PATH, Navigator
from storefront.notifications import ConfirmService, ToastService
from storefront.session import Session

logger = structlog.get_logger(__name__)

ORDER_SUCCESS_PATH = "/order-success"


def order_payload(items: list[CartItem], address: Address, total_price: float) -> dict:
    """Request body for a new order. The address goes without its owner id."""
    return {
        "items": [
            {
                "product_id": item.product_id,
                "name": item.name,
                "image": item.image,
                "price": item.price,
                "quantity": item.quantity,
                "selected_specs": {k: v.model_dump() for k, v in item.selected_specs.items()},
            }
            for item in items
        ],
        "address": address.model_dump(exclude={"user_id"}),
        "total_price": total_price,
    }


class OrderClient:
    def __init__(self, api: StorefrontApi, toasts: ToastService, confirms: ConfirmService | None = None):
        self._api = api
        self._toasts = toasts
        self._confirms = confirms

    def create_order(self, items: list[CartItem], address: Address, total_price: float) -> Order:
        return self._api.create_order(order_payload(items, address, total_price))

    def get_order(self, order_id: str) -> Order | None:
        return self._api.get_order(order_id)

    def list_orders(self, status: OrderStatus | str | None = None) -> list[Order]:
        orders = self._api.list_orders()
        if status is None or status == "all":
            return orders
        wanted = OrderStatus(status)
        return [order for order in orders if order.status == wanted]

    def pay_order(self, order_id: str) -> Order:
        try:
            order = self._api.pay_order(order_id)
        except ApiError as exc:
            self._toasts.error(exc.message or "Payment failed, please try again later")
            raise
        self._toasts.success("Payment successful")
        return order

    def cancel_order(self, order_id: str) -> Order:
        try:
            order = self._api.cancel_order(order_id)
        except ApiError as exc:
            self._toasts.error(exc.message or "Failed to cancel the order, please try again later")
            raise
        self._toasts.success("Order cancelled")
        return order

    def request_cancel(self, order_id: str, on_cancelled=None) -> None:
        """Ask for confirmation, then cancel. Failures are reported by toast."""
        if self._confirms is None:
            raise RuntimeError("Cancelling with confirmation needs a ConfirmService")

        def confirmed():
            try:
                order = self.cancel_order(order_id)
            except ApiError as exc:
                logger.info("order_cancel_rejected", order_id=order_id, error=exc.message)
                return
            if on_cancelled is not None:
                on_cancelled(order)

        self._confirms.show(
            "Cancel this order? This cannot be undone.",
            on_confirm=confirmed,
            title="Cancel order",
            confirm_text="Confirm cancel",
            cancel_text="Let me think",
            type="warning",
        )


class Checkout:
    """Turns the cart and a chosen address into an order."""

    def __init__(
        self,
        cart: CartStore,
        address_book: AddressBook,
        orders: OrderClient,
        session: Session,
        toasts: ToastService,
        navigator: Navigator | None = None,
    ):
        self._cart = cart
        self._address_book = address_book
        self._orders = orders
        self._session = session
        self._toasts = toasts
        self._navigator = navigator
        self._selected_address_id: str | None = None

    def select_address(self, address_id: str) -> None:
        self._selected_address_id = address_id

    @property
    def selected_address(self) -> Address | None:
        """The chosen address while it still exists, else the default."""
        if self._selected_address_id:
            chosen = self._address_book.get_address(self._selected_address_id)
            if chosen is not None:
                return chosen
        return self._address_book.default_address

    def submit(self) -> Order | None:
        """Place the order. Returns None, with a toast, when it cannot go ahead."""
        if not self._session.is_authenticated:
            self._toasts.warning("Please log in first")
            if self._navigator is not None:
                self._navigator.navigate(LOGIN_PATH, state={"from": "/checkout"})
            return None

        if self._cart.is_empty:
            self._toasts.warning("Your cart is empty")
            return None

        address = self.selected_address
        if address is None:
            self._toasts.warning("Please select a shipping address")
            return None

        items = self._cart.items
        try:
            order = self._orders.create_order(items, address, self._cart.total_price)
        except ApiError as exc:
            logger.info("checkout_failed", error=exc.message, status=exc.status_code)
            self._toasts.error(exc.message or "Failed to submit order, please try again")
            return None

        self._cart.clear_cart()
        self._toasts.success("Order submitted")
        if self._navigator is not None:
            self._navigator.navigate(ORDER_SUCCESS_PATH, state={"order_no": order.order_no})
        return order
