"""Account and address-book load test scenarios.

Stateful SequentialTaskSet journeys. Steps execute in order and each depends
on the previous step succeeding.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import address_data, password, username, valid_phone
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


def register_shopper(taskset) -> bool:
    """Register a fresh account and keep its token on `taskset.state`."""
    state = taskset.state
    state.phone, state.password = valid_phone(), password()
    payload = {"username": username(), "phone": state.phone, "password": state.password}
    with taskset.client.post(
        "/api/users/register", json=payload, catch_response=True, name="POST /api/users/register"
    ) as resp:
        if resp.status_code == 201:
            body = resp.json()
            state.token, state.user_id = body["token"], body["user"]["id"]
            return True
        resp.failure(f"Registration failed: {resp.status_code} - {extract_error_detail(resp)}")
        return False


def add_address(taskset, is_default: bool = False) -> dict | None:
    state = taskset.state
    with taskset.client.post(
        "/api/addresses",
        json=address_data(is_default=is_default),
        headers=state.headers,
        catch_response=True,
        name="POST /api/addresses",
    ) as resp:
        if resp.status_code == 201:
            address = resp.json()
            state.address_ids.append(address["id"])
            if address["is_default"]:
                state.default_address = address
            return address
        resp.failure(f"Add address failed: {resp.status_code} - {extract_error_detail(resp)}")
        return None


class AccountJourney(SequentialTaskSet):
    """Register -> Log in -> Fetch profile."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def register(self):
        if not register_shopper(self):
            self.interrupt()

    @task
    def login(self):
        with self.client.post(
            "/api/users/login",
            json={"phone": self.state.phone, "password": self.state.password},
            catch_response=True,
            name="POST /api/users/login",
        ) as resp:
            if resp.status_code == 200:
                self.state.token = resp.json()["token"]
            else:
                resp.failure(f"Login failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def fetch_profile(self):
        with self.client.get(
            "/api/users/me", headers=self.state.headers, catch_response=True, name="GET /api/users/me"
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Profile failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class AddressBookJourney(SequentialTaskSet):
    """Register -> Add two addresses -> Switch default -> Edit -> Delete one."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def register(self):
        if not register_shopper(self):
            self.interrupt()

    @task
    def add_addresses(self):
        if add_address(self, is_default=True) is None or add_address(self) is None:
            self.interrupt()

    @task
    def switch_default(self):
        address_id = self.state.address_ids[-1]
        with self.client.patch(
            f"/api/addresses/{address_id}/default",
            headers=self.state.headers,
            catch_response=True,
            name="PATCH /api/addresses/{id}/default",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Set default failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def edit_address(self):
        address_id = self.state.address_ids[0]
        with self.client.put(
            f"/api/addresses/{address_id}",
            json={"tag": "Office"},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /api/addresses/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update address failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def delete_address(self):
        address_id = self.state.address_ids.pop(0)
        with self.client.delete(
            f"/api/addresses/{address_id}",
            headers=self.state.headers,
            catch_response=True,
            name="DELETE /api/addresses/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Delete address failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class RegionBrowser(SequentialTaskSet):
    """Walk the region cascade the way the address form does."""

    @task
    def browse(self):
        provinces = self.client.get("/api/regions/provinces", name="GET /api/regions/provinces").json()
        if not provinces:
            self.interrupt()
            return
        province = provinces[0]["code"]
        cities = self.client.get(
            f"/api/regions/provinces/{province}/cities", name="GET /api/regions/provinces/{code}/cities"
        ).json()
        if cities:
            self.client.get(
                f"/api/regions/provinces/{province}/cities/{cities[0]['code']}/districts",
                name="GET /api/regions/provinces/{code}/cities/{code}/districts",
            )
        self.interrupt()


class IdentityUser(HttpUser):
    """Account and address-book traffic."""

    wait_time = between(0.5, 2.0)
    tasks = {AccountJourney: 3, AddressBookJourney: 2, RegionBrowser: 1}
