"""Coupon management — command and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.coupon.coupon import Coupon, DiscountKind
from ordering.domain import ordering


@ordering.command(part_of="Coupon")
class CreateCoupon:
    code = String(required=True, max_length=50)
    name = String(required=True, max_length=255)
    description = Text()
    discount_kind = String(required=True, choices=DiscountKind)
    discount_value = Float(required=True, min_value=0.0)
    min_order_amount = Float(min_value=0.0)
    max_discount_amount = Float(min_value=0.0)
    valid_from = DateTime(required=True)
    valid_until = DateTime(required=True)
    usage_limit = Integer(min_value=1)
    applicable_categories = Text()  # JSON: list of category names
    active = Boolean(default=True)


@ordering.command_handler(part_of=Coupon)
class CreateCouponHandler:
    @handle(CreateCoupon)
    def create_coupon(self, command):
        repo = current_domain.repository_for(Coupon)
        if repo.find_by_code(command.code):
            raise ValidationError({"code": ["Coupon code already exists"]})

        categories = command.applicable_categories
        if isinstance(categories, str):
            categories = json.loads(categories)

        coupon = Coupon.create(
            code=command.code,
            name=command.name,
            description=command.description,
            discount_kind=command.discount_kind,
            discount_value=command.discount_value,
            min_order_amount=command.min_order_amount,
            max_discount_amount=command.max_discount_amount,
            valid_from=command.valid_from,
            valid_until=command.valid_until,
            usage_limit=command.usage_limit,
            applicable_categories=categories,
            active=command.active if command.active is not None else True,
        )
        repo.add(coupon)
        return str(coupon.id)
