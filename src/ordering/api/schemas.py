"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class SelectedSpecSchema(BaseModel):
    id: str
    label: str
    spec_name: str


class OrderItemSchema(BaseModel):
    product_id: str
    name: str
    image: str | None = None
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)
    selected_specs: dict[str, SelectedSpecSchema] = Field(default_factory=dict)


class OrderAddressSchema(BaseModel):
    id: str | None = None
    name: str
    phone: str
    province: str
    city: str
    district: str
    detail: str
    tag: str | None = None


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateOrderRequest(BaseModel):
    items: list[OrderItemSchema] = Field(default_factory=list)
    address: OrderAddressSchema | None = None
    total_price: float = Field(ge=0)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {
                            "product_id": "p-1001",
                            "name": "Silk Scarf",
                            "image": "https://cdn.example.com/p-1001.jpg",
                            "price": 1280.0,
                            "quantity": 2,
                            "selected_specs": {"color": {"id": "red", "label": "Red", "spec_name": "Color"}},
                        }
                    ],
                    "address": {
                        "id": "a1b2c3d4",
                        "name": "LinYue",
                        "phone": "13812345678",
                        "province": "浙江省",
                        "city": "杭州市",
                        "district": "西湖区",
                        "detail": "文三路 90 号 5 幢 301",
                    },
                    "total_price": 2560.0,
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderResponse(BaseModel):
    id: str
    order_no: str
    items: list[OrderItemSchema]
    address: OrderAddressSchema
    total_price: float
    status: str
    created_at: datetime
    paid_at: datetime | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None

    @classmethod
    def from_aggregate(cls, order) -> OrderResponse:
        address = order.address
        return cls(
            id=str(order.id),
            order_no=order.order_no,
            items=[
                OrderItemSchema(
                    product_id=item.product_id,
                    name=item.name,
                    image=item.image,
                    price=item.price,
                    quantity=item.quantity,
                    selected_specs=item.specs,
                )
                for item in order.items
            ],
            address=OrderAddressSchema(
                id=address.address_id,
                name=address.name,
                phone=address.phone,
                province=address.province,
                city=address.city,
                district=address.district,
                detail=address.detail,
                tag=address.tag,
            ),
            total_price=order.total_price,
            status=order.status,
            created_at=order.created_at,
            paid_at=order.paid_at,
            shipped_at=order.shipped_at,
            delivered_at=order.delivered_at,
            cancelled_at=order.cancelled_at,
        )
