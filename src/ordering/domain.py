"""Ordering bounded context: customer orders and their status lifecycle.

Orders are placed from a cart snapshot and move through
pending → paid → shipped → delivered, with cancellation allowed while
the order is still pending or paid.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
