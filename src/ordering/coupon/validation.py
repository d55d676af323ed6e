"""Coupon validation — read-only eligibility checks used by previews and checkout.

Validation never changes a coupon's usage count; only order placement redeems.
"""

import json
from dataclasses import dataclass
from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.coupon.coupon import Coupon


@dataclass(frozen=True)
class CouponQuote:
    """A coupon that passed validation, with the discount it grants."""

    code: str
    name: str
    description: str | None
    discount_kind: str
    discount_value: float
    discount: float

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "discount_kind": self.discount_kind,
            "discount_value": self.discount_value,
            "discount": self.discount,
        }


def validate_coupon(code, order_amount, now=None) -> CouponQuote:
    """Check a coupon code against an order amount.

    Raises ObjectNotFoundError for unknown, inactive or out-of-window codes
    and ValidationError for exhausted coupons or orders under the minimum.
    """
    now = now or datetime.now(UTC)
    coupon = current_domain.repository_for(Coupon).find_by_code(code)
    if coupon is None:
        raise ObjectNotFoundError({"code": ["Invalid or expired coupon code"]})

    discount = coupon.evaluate(order_amount, now)
    return CouponQuote(
        code=coupon.code,
        name=coupon.name,
        description=coupon.description,
        discount_kind=coupon.discount_kind,
        discount_value=coupon.discount_value,
        discount=discount,
    )


def coupon_to_dict(coupon: Coupon) -> dict:
    return {
        "id": str(coupon.id),
        "code": coupon.code,
        "name": coupon.name,
        "description": coupon.description,
        "discount_kind": coupon.discount_kind,
        "discount_value": coupon.discount_value,
        "min_order_amount": coupon.min_order_amount,
        "max_discount_amount": coupon.max_discount_amount,
        "valid_from": coupon.valid_from.isoformat() if coupon.valid_from else None,
        "valid_until": coupon.valid_until.isoformat() if coupon.valid_until else None,
        "applicable_categories": json.loads(coupon.applicable_categories) if coupon.applicable_categories else [],
    }


def list_active_coupons(now=None) -> list[Coupon]:
    """Coupons currently redeemable by date and active flag, newest first."""
    return current_domain.repository_for(Coupon).find_live(now)
