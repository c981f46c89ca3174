"""Order placement: command and handler."""

import json

from protean import handle
from protean.fields import Float, Identifier, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of item dicts
    address = Text(required=True)  # JSON: address dict
    total_price = Float(required=True)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        address = json.loads(command.address) if isinstance(command.address, str) else command.address

        order = Order.place(
            customer_id=command.customer_id,
            items_data=items_data,
            address=address,
            total_price=command.total_price,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)
