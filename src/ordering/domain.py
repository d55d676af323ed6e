"""Ordering bounded context — carts, coupons and orders.

Handles the server-side shopping cart, coupon validation and redemption,
and the checkout flow that snapshots a priced cart into an immutable order.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
