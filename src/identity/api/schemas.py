"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from pydantic import BaseModel

# --- Request Schemas ---


class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "username": "Lin Yue",
                    "phone": "13812345678",
                    "email": "lin.yue@example.com",
                    "password": "s3cret-pass",
                }
            ]
        }
    }

    username: str
    phone: str
    email: str | None = None
    password: str


class LoginRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"phone": "13812345678", "password": "s3cret-pass"}]}}

    phone: str
    password: str


class AddressRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "LinYue",
                    "phone": "13812345678",
                    "province": "浙江省",
                    "city": "杭州市",
                    "district": "西湖区",
                    "detail": "文三路 90 号 5 幢 301",
                    "is_default": True,
                    "tag": "Home",
                }
            ]
        }
    }

    name: str
    phone: str
    province: str
    city: str
    district: str
    detail: str
    is_default: bool = False
    tag: str | None = None


class UpdateAddressRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"detail": "文三路 90 号 5 幢 302", "is_default": True}]}}

    name: str | None = None
    phone: str | None = None
    province: str | None = None
    city: str | None = None
    district: str | None = None
    detail: str | None = None
    is_default: bool | None = None
    tag: str | None = None


# --- Response Schemas ---


class UserResponse(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "a1b2c3d4-e5f6-7890-abcd-ef1234567890",
                    "username": "Lin Yue",
                    "phone": "13812345678",
                    "email": "lin.yue@example.com",
                }
            ]
        }
    }

    id: str
    username: str
    phone: str
    email: str | None = None

    @classmethod
    def from_customer(cls, customer) -> UserResponse:
        return cls(id=str(customer.id), username=customer.username, phone=customer.phone, email=customer.email)


class AuthResponse(BaseModel):
    user: UserResponse
    token: str


class AddressResponse(BaseModel):
    id: str
    user_id: str
    name: str
    phone: str
    province: str
    city: str
    district: str
    detail: str
    is_default: bool = False
    tag: str | None = None

    @classmethod
    def from_entity(cls, customer_id, address) -> AddressResponse:
        return cls(
            id=str(address.id),
            user_id=str(customer_id),
            name=address.name,
            phone=address.phone,
            province=address.province,
            city=address.city,
            district=address.district,
            detail=address.detail,
            is_default=bool(address.is_default),
            tag=address.tag,
        )


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"
