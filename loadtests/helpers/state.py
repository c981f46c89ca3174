"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state. State tracks the token
and ids returned by earlier steps so follow-up requests can use them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """A simulated shopper: credentials plus what they have created."""

    phone: str | None = None
    password: str | None = None
    token: str | None = None
    user_id: str | None = None
    address_ids: list[str] = field(default_factory=list)
    default_address: dict | None = None
    order_ids: list[str] = field(default_factory=list)

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}
