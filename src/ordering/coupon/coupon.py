"""Coupon aggregate (CQRS) — discount codes with a validity window and usage limit.

A coupon is looked up by its code, case-insensitively. Validation checks the
active flag, the validity window, the usage limit and the minimum order
amount; only a placed order redeems it.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from ordering.coupon.events import CouponCreated, CouponRedeemed
from ordering.domain import ordering
from ordering.pricing import money


class DiscountKind(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


def normalize_code(code) -> str:
    return (code or "").strip().upper()


def as_utc(value):
    """Treat naive timestamps (as returned by some stores) as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


@ordering.aggregate
class Coupon:
    code = String(required=True, max_length=50, unique=True)
    name = String(required=True, max_length=255)
    description = Text()
    discount_kind = String(required=True, choices=DiscountKind)
    discount_value = Float(required=True, min_value=0.0)
    min_order_amount = Float(min_value=0.0)
    max_discount_amount = Float(min_value=0.0)
    valid_from = DateTime(required=True)
    valid_until = DateTime(required=True)
    usage_limit = Integer(min_value=1)
    used_count = Integer(default=0, min_value=0)
    applicable_categories = Text()  # JSON array, informational only
    active = Boolean(default=True)
    created_at = DateTime()

    @invariant.post
    def used_count_cannot_exceed_usage_limit(self):
        if self.usage_limit is not None and (self.used_count or 0) > self.usage_limit:
            raise ValidationError({"used_count": ["Coupon usage limit reached"]})

    @invariant.post
    def percentage_cannot_exceed_hundred(self):
        if self.discount_kind == DiscountKind.PERCENTAGE.value and self.discount_value > 100:
            raise ValidationError({"discount_value": ["Percentage discount cannot exceed 100"]})

    @invariant.post
    def validity_window_must_be_ordered(self):
        if self.valid_from and self.valid_until and as_utc(self.valid_from) > as_utc(self.valid_until):
            raise ValidationError({"valid_until": ["Coupon cannot expire before it becomes valid"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        code,
        name,
        discount_kind,
        discount_value,
        valid_from,
        valid_until,
        description=None,
        min_order_amount=None,
        max_discount_amount=None,
        usage_limit=None,
        applicable_categories=None,
        active=True,
    ):
        coupon = cls(
            code=normalize_code(code),
            name=name,
            description=description,
            discount_kind=discount_kind,
            discount_value=discount_value,
            min_order_amount=min_order_amount,
            max_discount_amount=max_discount_amount,
            valid_from=valid_from,
            valid_until=valid_until,
            usage_limit=usage_limit,
            used_count=0,
            applicable_categories=json.dumps(applicable_categories or []),
            active=active,
            created_at=datetime.now(UTC),
        )

        coupon.raise_(
            CouponCreated(
                coupon_id=str(coupon.id),
                code=coupon.code,
                discount_kind=coupon.discount_kind,
                discount_value=coupon.discount_value,
                valid_from=coupon.valid_from,
                valid_until=coupon.valid_until,
            )
        )
        return coupon

    # -------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------
    def is_live(self, now=None) -> bool:
        """Active and inside its validity window (both ends inclusive)."""
        now = now or datetime.now(UTC)
        return bool(self.active) and as_utc(self.valid_from) <= now <= as_utc(self.valid_until)

    @property
    def is_exhausted(self) -> bool:
        return self.usage_limit is not None and (self.used_count or 0) >= self.usage_limit

    def discount_for(self, order_amount) -> float:
        """Raw discount for an order amount, before any eligibility checks."""
        if self.discount_kind == DiscountKind.PERCENTAGE.value:
            discount = order_amount * self.discount_value / 100
            if self.max_discount_amount:
                discount = min(discount, self.max_discount_amount)
        else:
            discount = min(self.discount_value, order_amount)
        return money(max(discount, 0.0))

    def evaluate(self, order_amount, now=None) -> float:
        """Check eligibility for an order amount and return the discount."""
        if not self.is_live(now):
            raise ObjectNotFoundError({"code": ["Invalid or expired coupon code"]})

        if self.is_exhausted:
            raise ValidationError({"code": ["Coupon usage limit reached"]})

        if self.min_order_amount and order_amount < self.min_order_amount:
            raise ValidationError({"order_amount": [f"Minimum order amount of ₹{self.min_order_amount:g} required"]})

        return self.discount_for(order_amount)

    # -------------------------------------------------------------------
    # Redemption
    # -------------------------------------------------------------------
    def redeem(self, order_id):
        """Count one use of the coupon by a placed order."""
        if self.is_exhausted:
            raise ValidationError({"code": ["Coupon usage limit reached"]})

        self.used_count = (self.used_count or 0) + 1

        self.raise_(
            CouponRedeemed(
                coupon_id=str(self.id),
                code=self.code,
                order_id=str(order_id),
                used_count=self.used_count,
            )
        )


@ordering.repository(part_of=Coupon)
class CouponRepository:
    """Coupon lookups by code and availability."""

    def find_by_code(self, code) -> Coupon | None:
        matches = self._dao.query.filter(code=normalize_code(code)).all().items
        return matches[0] if matches else None

    def find_live(self, now=None) -> list[Coupon]:
        """Active coupons inside their validity window, newest first."""
        now = now or datetime.now(UTC)
        coupons = self._dao.query.filter(active=True).all().items
        live = [coupon for coupon in coupons if coupon.is_live(now)]
        return sorted(live, key=lambda coupon: as_utc(coupon.created_at) or as_utc(coupon.valid_from), reverse=True)
