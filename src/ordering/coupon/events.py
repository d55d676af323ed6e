"""Domain events for the Coupon aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Coupon")
class CouponCreated:
    """A coupon was made available to customers."""

    __version__ = 1

    coupon_id = Identifier(required=True)
    code = String(required=True)
    discount_kind = String(required=True)
    discount_value = Float(required=True)
    valid_from = DateTime(required=True)
    valid_until = DateTime(required=True)


@ordering.event(part_of="Coupon")
class CouponRedeemed:
    """A coupon was used by a placed order."""

    __version__ = 1

    coupon_id = Identifier(required=True)
    code = String(required=True)
    order_id = Identifier(required=True)
    used_count = Integer(required=True)
