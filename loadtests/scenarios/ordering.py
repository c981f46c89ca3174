"""Ordering load test scenarios.

Each journey registers its own shopper, adds an address and then drives an
order through one path of the status machine.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import order_payload
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState
from loadtests.scenarios.identity import add_address, register_shopper


class _OrderJourney(SequentialTaskSet):
    def on_start(self):
        self.state = ShopperState()

    def _transition(self, action: str) -> None:
        order_id = self.state.order_ids[-1]
        with self.client.post(
            f"/api/orders/{order_id}/{action}",
            headers=self.state.headers,
            catch_response=True,
            name=f"POST /api/orders/{{id}}/{action}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"{action} failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def register(self):
        if not register_shopper(self):
            self.interrupt()

    @task
    def add_address(self):
        if add_address(self, is_default=True) is None:
            self.interrupt()

    @task
    def place_order(self):
        with self.client.post(
            "/api/orders",
            json=order_payload(self.state.default_address),
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["id"])
            else:
                resp.failure(f"Place order failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()


class CheckoutAndPayJourney(_OrderJourney):
    """Register -> Address -> Place order -> Pay -> List orders."""

    @task
    def pay(self):
        self._transition("pay")

    @task
    def list_orders(self):
        with self.client.get(
            "/api/orders", headers=self.state.headers, catch_response=True, name="GET /api/orders"
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List orders failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CancellationJourney(_OrderJourney):
    """Register -> Address -> Place order -> View it -> Cancel."""

    @task
    def view_order(self):
        order_id = self.state.order_ids[-1]
        with self.client.get(
            f"/api/orders/{order_id}", headers=self.state.headers, catch_response=True, name="GET /api/orders/{id}"
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Get order failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def cancel(self):
        self._transition("cancel")

    @task
    def done(self):
        self.interrupt()


class OrderingUser(HttpUser):
    """Checkout traffic: mostly paid orders, some cancellations."""

    wait_time = between(0.5, 2.0)
    tasks = {CheckoutAndPayJourney: 3, CancellationJourney: 1}
