"""FastAPI endpoints for the Identity domain."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from identity.api.auth import current_customer_id
from identity.api.schemas import (
    AddressRequest,
    AddressResponse,
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    StatusResponse,
    UpdateAddressRequest,
    UserResponse,
)
from identity.customer.addresses import (
    AddAddress,
    RemoveAddress,
    SetDefaultAddress,
    UpdateAddress,
)
from identity.customer.authentication import authenticate
from identity.customer.customer import Customer
from identity.customer.registration import RegisterCustomer
from identity.shared.security import ensure_password_strength, hash_password, issue_token

users_router = APIRouter(prefix="/users", tags=["users"])
addresses_router = APIRouter(prefix="/addresses", tags=["addresses"])


def _load_customer(customer_id):
    return current_domain.repository_for(Customer).get(customer_id)


def _address_response(customer_id, address_id) -> AddressResponse:
    customer = _load_customer(customer_id)
    return AddressResponse.from_entity(customer.id, customer.find_address(address_id))


# --- Accounts ---


@users_router.post("/register", status_code=201, response_model=AuthResponse)
async def register(body: RegisterRequest) -> AuthResponse:
    ensure_password_strength(body.password)
    command = RegisterCustomer(
        username=body.username,
        phone=body.phone,
        email=body.email,
        password_hash=hash_password(body.password),
    )
    customer_id = current_domain.process(command, asynchronous=False)
    customer = _load_customer(customer_id)
    return AuthResponse(user=UserResponse.from_customer(customer), token=issue_token(customer.id))


@users_router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest) -> AuthResponse:
    customer = authenticate(body.phone, body.password)
    return AuthResponse(user=UserResponse.from_customer(customer), token=issue_token(customer.id))


@users_router.get("/me", response_model=UserResponse)
async def me(customer_id: str = Depends(current_customer_id)) -> UserResponse:
    return UserResponse.from_customer(_load_customer(customer_id))


# --- Address book ---


@addresses_router.get("", response_model=list[AddressResponse])
async def list_addresses(customer_id: str = Depends(current_customer_id)) -> list[AddressResponse]:
    customer = _load_customer(customer_id)
    return [AddressResponse.from_entity(customer.id, address) for address in customer.addresses]


@addresses_router.get("/{address_id}", response_model=AddressResponse)
async def get_address(address_id: str, customer_id: str = Depends(current_customer_id)) -> AddressResponse:
    return _address_response(customer_id, address_id)


@addresses_router.post("", status_code=201, response_model=AddressResponse)
async def add_address(body: AddressRequest, customer_id: str = Depends(current_customer_id)) -> AddressResponse:
    command = AddAddress(
        customer_id=customer_id,
        name=body.name,
        phone=body.phone,
        province=body.province,
        city=body.city,
        district=body.district,
        detail=body.detail,
        tag=body.tag,
        is_default=body.is_default,
    )
    address_id = current_domain.process(command, asynchronous=False)
    return _address_response(customer_id, address_id)


@addresses_router.put("/{address_id}", response_model=AddressResponse)
async def update_address(
    address_id: str, body: UpdateAddressRequest, customer_id: str = Depends(current_customer_id)
) -> AddressResponse:
    command = UpdateAddress(
        customer_id=customer_id,
        address_id=address_id,
        **body.model_dump(exclude_none=True),
    )
    current_domain.process(command, asynchronous=False)
    return _address_response(customer_id, address_id)


@addresses_router.delete("/{address_id}", response_model=StatusResponse)
async def remove_address(address_id: str, customer_id: str = Depends(current_customer_id)) -> StatusResponse:
    command = RemoveAddress(
        customer_id=customer_id,
        address_id=address_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@addresses_router.patch("/{address_id}/default", response_model=AddressResponse)
async def set_default_address(address_id: str, customer_id: str = Depends(current_customer_id)) -> AddressResponse:
    command = SetDefaultAddress(
        customer_id=customer_id,
        address_id=address_id,
    )
    current_domain.process(command, asynchronous=False)
    return _address_response(customer_id, address_id)
