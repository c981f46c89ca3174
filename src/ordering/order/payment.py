"""Order payment: command and handler.

Payment is recorded on behalf of the order's owner; another customer's
order is reported as not found.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.order.queries import get_customer_order


@ordering.command(part_of="Order")
class PayOrder:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class PayOrderHandler:
    @handle(PayOrder)
    def pay_order(self, command):
        order = get_customer_order(command.order_id, command.customer_id)
        order.pay()
        current_domain.repository_for(Order).add(order)
        return str(order.id)
