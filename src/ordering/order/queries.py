"""Read helpers for orders, scoped to the owning customer."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.order.order import Order


def get_customer_order(order_id, customer_id):
    """Load an order owned by `customer_id`. Anyone else's order is not found."""
    order = current_domain.repository_for(Order).get(order_id)
    if not order.is_owned_by(customer_id):
        raise ObjectNotFoundError(f"Order {order_id} not found")
    return order


def list_customer_orders(customer_id):
    """All orders of a customer, newest first."""
    repo = current_domain.repository_for(Order)
    orders = repo._dao.query.filter(customer_id=str(customer_id)).all().items
    return sorted(orders, key=lambda order: order.created_at, reverse=True)
