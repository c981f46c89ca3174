"""Order aggregate: the core of the ordering domain.

An order is a frozen snapshot of the customer's cart and chosen shipping
address at checkout. Only its status changes afterwards.

State Machine:
    PENDING → PAID → SHIPPED → DELIVERED
    PENDING / PAID → CANCELLED
"""

import json
import time
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from ordering.domain import ordering
from ordering.order.events import (
    OrderCancelled,
    OrderDelivered,
    OrderPaid,
    OrderPlaced,
    OrderShipped,
)

# Allowed gap between the submitted total and the sum of the line items
_TOTAL_TOLERANCE = 0.01


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAID, OrderStatus.CANCELLED},
    OrderStatus.PAID: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


def generate_order_no():
    """`ORD` + millisecond timestamp + short random suffix."""
    return f"ORD{int(time.time() * 1000)}{uuid4().hex[:6].upper()}"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class ShippingAddress:
    """The delivery address captured at checkout.

    Once recorded on an Order, the address is immutable; later edits to the
    customer's address book do not reach placed orders.
    """

    address_id = String(max_length=50)
    name = String(required=True, max_length=20)
    phone = String(required=True, max_length=11)
    province = String(required=True, max_length=50)
    city = String(required=True, max_length=50)
    district = String(required=True, max_length=50)
    detail = String(required=True, max_length=100)
    tag = String(max_length=10)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A purchased line: product, price at checkout and the chosen spec options.

    `selected_specs` holds the JSON-encoded selections keyed by spec id, each
    with the option `id`, its `label` and the `spec_name`.
    """

    product_id = String(required=True, max_length=50)
    name = String(required=True, max_length=255)
    image = String(max_length=1000)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    selected_specs = Text()

    @property
    def specs(self):
        return json.loads(self.selected_specs) if self.selected_specs else {}

    @property
    def subtotal(self):
        return self.price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    order_no = String(required=True, max_length=40)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    items = HasMany(OrderItem)
    address = ValueObject(ShippingAddress)
    total_price = Float(required=True, min_value=0.0)
    created_at = DateTime()
    paid_at = DateTime()
    shipped_at = DateTime()
    delivered_at = DateTime()
    cancelled_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, items_data, address, total_price):
        """Create a pending order from a cart snapshot.

        Args:
            customer_id: The customer placing the order.
            items_data: List of dicts with product_id, name, image, price,
                        quantity and optional selected_specs (dict).
            address: Dict with name, phone, province, city, district, detail
                     and optionally address_id and tag.
            total_price: The total the customer agreed to pay.
        """
        if not items_data:
            raise ValidationError({"items": ["Order items are required"]})
        if not address:
            raise ValidationError({"address": ["Shipping address is required"]})

        items = [
            OrderItem(
                product_id=str(item["product_id"]),
                name=item["name"],
                image=item.get("image"),
                price=item["price"],
                quantity=item["quantity"],
                selected_specs=json.dumps(item.get("selected_specs") or {}),
            )
            for item in items_data
        ]

        computed_total = sum(item.subtotal for item in items)
        if abs(computed_total - total_price) > _TOTAL_TOLERANCE:
            raise ValidationError(
                {"total_price": [f"Total {total_price:.2f} does not match item total {computed_total:.2f}"]}
            )

        now = datetime.now(UTC)
        order = cls(
            customer_id=customer_id,
            order_no=generate_order_no(),
            status=OrderStatus.PENDING.value,
            items=items,
            address=ShippingAddress(
                address_id=address.get("address_id") or address.get("id"),
                name=address["name"],
                phone=address["phone"],
                province=address["province"],
                city=address["city"],
                district=address["district"],
                detail=address["detail"],
                tag=address.get("tag"),
            ),
            total_price=round(total_price, 2),
            created_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                order_no=order.order_no,
                item_count=sum(item.quantity for item in items),
                total_price=order.total_price,
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def is_owned_by(self, customer_id):
        return str(self.customer_id) == str(customer_id)

    # -------------------------------------------------------------------
    # Order lifecycle transitions
    # -------------------------------------------------------------------
    def pay(self):
        """Record that the customer paid for a pending order."""
        self._assert_can_transition(OrderStatus.PAID)
        now = datetime.now(UTC)
        self.status = OrderStatus.PAID.value
        self.paid_at = now

        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                amount=self.total_price,
                paid_at=now,
            )
        )

    def ship(self):
        self._assert_can_transition(OrderStatus.SHIPPED)
        now = datetime.now(UTC)
        self.status = OrderStatus.SHIPPED.value
        self.shipped_at = now

        self.raise_(
            OrderShipped(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                shipped_at=now,
            )
        )

    def deliver(self):
        self._assert_can_transition(OrderStatus.DELIVERED)
        now = datetime.now(UTC)
        self.status = OrderStatus.DELIVERED.value
        self.delivered_at = now

        self.raise_(
            OrderDelivered(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                delivered_at=now,
            )
        )

    def cancel(self):
        """Cancel an order that has not shipped yet."""
        self._assert_can_transition(OrderStatus.CANCELLED)
        previous_status = self.status
        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancelled_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                previous_status=previous_status,
                cancelled_at=now,
            )
        )
