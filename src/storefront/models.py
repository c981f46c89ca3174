"""Client-side views of the data the storefront API returns."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from storefront.catalogue import SelectedSpec


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class UserProfile(BaseModel):
    id: str
    username: str
    phone: str
    email: str | None = None


class AddressDraft(BaseModel):
    """Address form contents before the server assigns an id."""

    name: str = ""
    phone: str = ""
    province: str = ""
    city: str = ""
    district: str = ""
    detail: str = ""
    is_default: bool = False
    tag: str | None = None


class Address(AddressDraft):
    id: str
    user_id: str


class OrderItem(BaseModel):
    product_id: str
    name: str
    image: str | None = None
    price: float
    quantity: int
    selected_specs: dict[str, SelectedSpec] = Field(default_factory=dict)


class OrderAddress(BaseModel):
    id: str | None = None
    name: str
    phone: str
    province: str
    city: str
    district: str
    detail: str
    tag: str | None = None


class Order(BaseModel):
    id: str
    order_no: str
    items: list[OrderItem]
    address: OrderAddress
    total_price: float
    status: OrderStatus
    created_at: datetime
    paid_at: datetime | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None


class Region(BaseModel):
    code: str
    name: str


class AuthResult(BaseModel):
    user: UserProfile
    token: str
