"""Typed facade over the storefront REST endpoints."""

from storefront.api.transport import ApiClient, ApiError
from storefront.models import Address, AddressDraft, AuthResult, Order, Region, UserProfile

USERS = "/api/users"
ADDRESSES = "/api/addresses"
ORDERS = "/api/orders"
REGIONS = "/api/regions/provinces"
HEALTH = "/health"


class StorefrontApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def _get_or_none(self, path: str):
        """GET that reports a missing resource as None instead of raising."""
        try:
            return self.client.get(path)
        except ApiError as exc:
            if exc.is_not_found:
                return None
            raise

    # --- Accounts ---

    def register(self, username: str, phone: str, password: str, email: str | None = None) -> AuthResult:
        body = {"username": username, "phone": phone, "password": password, "email": email}
        return AuthResult.model_validate(self.client.post(f"{USERS}/register", json=body))

    def login(self, phone: str, password: str) -> AuthResult:
        return AuthResult.model_validate(self.client.post(f"{USERS}/login", json={"phone": phone, "password": password}))

    def current_user(self) -> UserProfile:
        return UserProfile.model_validate(self.client.get(f"{USERS}/me"))

    # --- Address book ---

    def list_addresses(self) -> list[Address]:
        return [Address.model_validate(a) for a in self.client.get(ADDRESSES) or []]

    def get_address(self, address_id: str) -> Address | None:
        data = self._get_or_none(f"{ADDRESSES}/{address_id}")
        return Address.model_validate(data) if data is not None else None

    def create_address(self, draft: AddressDraft) -> Address:
        return Address.model_validate(self.client.post(ADDRESSES, json=draft.model_dump()))

    def update_address(self, address_id: str, changes: dict) -> Address:
        return Address.model_validate(self.client.put(f"{ADDRESSES}/{address_id}", json=changes))

    def delete_address(self, address_id: str) -> None:
        self.client.delete(f"{ADDRESSES}/{address_id}")

    def set_default_address(self, address_id: str) -> Address:
        return Address.model_validate(self.client.patch(f"{ADDRESSES}/{address_id}/default"))

    # --- Orders ---

    def list_orders(self) -> list[Order]:
        return [Order.model_validate(o) for o in self.client.get(ORDERS) or []]

    def get_order(self, order_id: str) -> Order | None:
        data = self._get_or_none(f"{ORDERS}/{order_id}")
        return Order.model_validate(data) if data is not None else None

    def create_order(self, payload: dict) -> Order:
        return Order.model_validate(self.client.post(ORDERS, json=payload))

    def pay_order(self, order_id: str) -> Order:
        return Order.model_validate(self.client.post(f"{ORDERS}/{order_id}/pay"))

    def cancel_order(self, order_id: str) -> Order:
        return Order.model_validate(self.client.post(f"{ORDERS}/{order_id}/cancel"))

    # --- Regions ---

    def provinces(self) -> list[Region]:
        return [Region.model_validate(r) for r in self.client.get(REGIONS) or []]

    def cities(self, province_code: str) -> list[Region]:
        return [Region.model_validate(r) for r in self.client.get(f"{REGIONS}/{province_code}/cities") or []]

    def districts(self, province_code: str, city_code: str) -> list[Region]:
        path = f"{REGIONS}/{province_code}/cities/{city_code}/districts"
        return [Region.model_validate(r) for r in self.client.get(path) or []]

    def health(self) -> dict:
        return self.client.get(HEALTH)
