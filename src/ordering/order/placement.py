"""Order placement — command and handler.

The handler never trusts client totals: it recomputes the subtotal from the
per-line prices it receives, re-validates the coupon, prices the order and
authorizes payment before anything is stored. Coupon redemption and the
order insert share the handler's unit of work, so a redemption refused at the
usage limit rolls the order back too.
"""

import json
from uuid import uuid4

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.cart.keys import normalize_ingredients
from ordering.coupon.coupon import Coupon
from ordering.coupon.validation import validate_coupon
from ordering.domain import ordering
from ordering.order.order import Order, OrderType, PaymentMethod
from ordering.payment import get_gateway
from ordering.payment.port import PaymentDeclined
from ordering.pricing import CURRENCY, price_lines, subtotal_of

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    lines = Text(required=True)  # JSON: list of line dicts
    order_type = String(required=True, choices=OrderType)
    delivery_address = Text()  # JSON: address dict
    payment_method = String(required=True, choices=PaymentMethod)
    coupon_code = String(max_length=50)
    cart_id = Identifier()


def _load(value):
    if value is None or value == "":
        return None
    return json.loads(value) if isinstance(value, str) else value


def normalize_order_line(raw: dict) -> dict:
    """Flatten a submitted line into the snapshot layout.

    Customization may be nested under ``customization`` or given inline.
    """
    if not isinstance(raw, dict):
        raise ValidationError({"lines": ["Each line must be an object"]})

    product_id = raw.get("product_id")
    name = raw.get("name")
    unit_price = raw.get("unit_price")
    if not product_id or not name or unit_price is None:
        raise ValidationError({"lines": ["Each line needs a product id, name and unit price"]})

    try:
        quantity = int(raw.get("quantity", 1))
        price = float(unit_price)
    except (TypeError, ValueError):
        raise ValidationError({"lines": ["Quantity and unit price must be numbers"]}) from None
    if quantity < 1:
        raise ValidationError({"lines": ["Quantity must be at least 1"]})
    if price < 0:
        raise ValidationError({"lines": ["Unit price cannot be negative"]})

    customization = raw.get("customization") or raw
    if not isinstance(customization, dict):
        raise ValidationError({"customization": ["Customization must be an object"]})
    return {
        "product_id": str(product_id),
        "name": name,
        "unit_price": price,
        "quantity": quantity,
        "size": customization.get("size") or None,
        "added_ingredients": normalize_ingredients(customization.get("added_ingredients")),
        "removed_ingredients": normalize_ingredients(customization.get("removed_ingredients")),
    }


def lines_from_cart(cart) -> list[dict]:
    """Snapshot the lines of a ShoppingCart in placement layout."""
    lines = []
    for line in cart.lines:
        customization = line.customization
        lines.append(
            {
                "product_id": str(line.product_id),
                "name": line.name,
                "unit_price": line.unit_price,
                "quantity": line.quantity,
                "size": customization.size if customization else None,
                "added_ingredients": customization.added if customization else [],
                "removed_ingredients": customization.removed if customization else [],
            }
        )
    return lines


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        raw_lines = _load(command.lines) or []
        if not isinstance(raw_lines, list) or not raw_lines:
            raise ValidationError({"lines": ["Order must contain at least one item"]})
        lines = [normalize_order_line(raw) for raw in raw_lines]

        delivery_address = _load(command.delivery_address)
        if command.order_type == OrderType.DELIVERY.value and not delivery_address:
            raise ValidationError({"delivery_address": ["Delivery address is required for delivery orders"]})

        # Coupons are re-checked here; a rejected code simply prices at zero discount
        subtotal = subtotal_of(lines)
        quote = None
        if command.coupon_code:
            try:
                quote = validate_coupon(command.coupon_code, subtotal)
            except (ObjectNotFoundError, ValidationError) as exc:
                logger.info(
                    "Coupon rejected at checkout",
                    coupon_code=command.coupon_code,
                    reason=str(exc),
                )

        summary = price_lines(lines, quote.discount if quote else 0.0)

        order_id = str(uuid4())
        authorization = get_gateway().authorize(
            amount=summary.total,
            currency=CURRENCY,
            payment_method=command.payment_method,
            idempotency_key=order_id,
        )
        if not authorization.success:
            logger.warning(
                "Payment declined",
                order_id=order_id,
                amount=summary.total,
                reason=authorization.failure_reason,
            )
            raise PaymentDeclined({"payment": [authorization.failure_reason or "Payment declined"]})

        order = Order.place(
            order_id=order_id,
            customer_id=command.customer_id,
            lines=lines,
            order_type=command.order_type,
            payment_method=command.payment_method,
            summary=summary,
            payment_reference=authorization.reference,
            delivery_address=delivery_address,
            coupon_code=quote.code if quote else None,
            cart_id=command.cart_id,
        )
        current_domain.repository_for(Order).add(order)

        if quote:
            coupon_repo = current_domain.repository_for(Coupon)
            coupon = coupon_repo.find_by_code(quote.code)
            coupon.redeem(order.id)
            coupon_repo.add(coupon)

        logger.info(
            "Order placed",
            order_id=order_id,
            customer_id=str(command.customer_id),
            total=summary.total,
            coupon_code=order.coupon_code,
        )
        return order_id
