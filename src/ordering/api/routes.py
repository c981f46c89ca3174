"""FastAPI routes for the Ordering domain."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from identity.api.auth import current_customer_id
from ordering.api.schemas import CreateOrderRequest, OrderResponse
from ordering.order.cancellation import CancelOrder
from ordering.order.creation import PlaceOrder
from ordering.order.payment import PayOrder
from ordering.order.queries import get_customer_order, list_customer_orders

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=list[OrderResponse])
async def list_orders(customer_id: str = Depends(current_customer_id)) -> list[OrderResponse]:
    return [OrderResponse.from_aggregate(order) for order in list_customer_orders(customer_id)]


@router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest, customer_id: str = Depends(current_customer_id)) -> OrderResponse:
    command = PlaceOrder(
        customer_id=customer_id,
        items=json.dumps([item.model_dump() for item in body.items]),
        address=json.dumps(body.address.model_dump() if body.address else None),
        total_price=body.total_price,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_aggregate(get_customer_order(order_id, customer_id))


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, customer_id: str = Depends(current_customer_id)) -> OrderResponse:
    return OrderResponse.from_aggregate(get_customer_order(order_id, customer_id))


@router.post("/{order_id}/pay", response_model=OrderResponse)
async def pay_order(order_id: str, customer_id: str = Depends(current_customer_id)) -> OrderResponse:
    command = PayOrder(order_id=order_id, customer_id=customer_id)
    current_domain.process(command, asynchronous=False)
    return OrderResponse.from_aggregate(get_customer_order(order_id, customer_id))


@router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str, customer_id: str = Depends(current_customer_id)) -> OrderResponse:
    command = CancelOrder(order_id=order_id, customer_id=customer_id)
    current_domain.process(command, asynchronous=False)
    return OrderResponse.from_aggregate(get_customer_order(order_id, customer_id))
