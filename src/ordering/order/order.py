"""Order aggregate — an immutable, priced snapshot of what a customer bought.

Orders are written once, at checkout. Line names, prices and customizations
are copied from the request so later catalogue changes never alter history.
Payment is authorized by a mocked gateway before the order is stored, so every
persisted order is ``confirmed`` with a ``completed`` payment. No workflow
moves an order beyond that status.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from ordering.domain import ordering
from ordering.order.events import OrderPlaced
from ordering.pricing import CURRENCY


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class OrderType(Enum):
    DELIVERY = "delivery"
    TAKEAWAY = "takeaway"


class PaymentMethod(Enum):
    CARD = "card"
    CASH = "cash"
    UPI = "upi"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class DeliveryAddress:
    """Where a delivery order goes, captured at checkout time."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    landmark = String(max_length=255)


@ordering.value_object(part_of="Order")
class OrderPricing:
    """Amounts locked at checkout. Currency is always rupees."""

    subtotal = Float(default=0.0, min_value=0.0)
    discount = Float(default=0.0, min_value=0.0)
    tax = Float(default=0.0, min_value=0.0)
    total = Float(default=0.0, min_value=0.0)
    currency = String(max_length=3, default=CURRENCY)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderLine:
    position = Integer(required=True, min_value=0)
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    size = String(max_length=10)
    added_ingredients = Text()  # JSON array
    removed_ingredients = Text()  # JSON array

    def to_dict(self) -> dict:
        return {
            "product_id": str(self.product_id),
            "name": self.name,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
            "customization": {
                "size": self.size,
                "added_ingredients": json.loads(self.added_ingredients) if self.added_ingredients else [],
                "removed_ingredients": json.loads(self.removed_ingredients) if self.removed_ingredients else [],
            },
        }


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    lines = HasMany(OrderLine)
    order_type = String(required=True, choices=OrderType)
    delivery_address = ValueObject(DeliveryAddress)
    pricing = ValueObject(OrderPricing)
    coupon_code = String(max_length=50)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_method = String(required=True, choices=PaymentMethod)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    payment_reference = String(max_length=255)
    cart_id = Identifier()
    created_at = DateTime()

    @invariant.post
    def delivery_orders_need_an_address(self):
        if self.order_type == OrderType.DELIVERY.value and self.delivery_address is None:
            raise ValidationError({"delivery_address": ["Delivery address is required for delivery orders"]})

    @classmethod
    def place(
        cls,
        order_id,
        customer_id,
        lines,
        order_type,
        payment_method,
        summary,
        payment_reference,
        delivery_address=None,
        coupon_code=None,
        cart_id=None,
    ):
        """Record an order whose payment has already been authorized.

        Args:
            order_id: Identity chosen before authorization, also used as the
                      gateway idempotency key.
            lines: List of dicts with product_id, name, unit_price, quantity,
                   size, added_ingredients and removed_ingredients.
            summary: PriceSummary computed by the pricing engine.
            delivery_address: Dict with street, city, state, zip_code and
                              optional landmark. Ignored for takeaway.
        """
        if not lines:
            raise ValidationError({"lines": ["Order must contain at least one item"]})

        if order_type != OrderType.DELIVERY.value:
            delivery_address = None

        order = cls(
            id=order_id,
            customer_id=customer_id,
            lines=[
                OrderLine(
                    position=position,
                    product_id=line["product_id"],
                    name=line["name"],
                    unit_price=line["unit_price"],
                    quantity=line["quantity"],
                    size=line.get("size"),
                    added_ingredients=json.dumps(line["added_ingredients"]) if line.get("added_ingredients") else None,
                    removed_ingredients=(
                        json.dumps(line["removed_ingredients"]) if line.get("removed_ingredients") else None
                    ),
                )
                for position, line in enumerate(lines)
            ],
            order_type=order_type,
            delivery_address=DeliveryAddress(**delivery_address) if delivery_address else None,
            pricing=OrderPricing(
                subtotal=summary.subtotal,
                discount=summary.discount,
                tax=summary.tax,
                total=summary.total,
                currency=CURRENCY,
            ),
            coupon_code=coupon_code,
            status=OrderStatus.CONFIRMED.value,
            payment_method=payment_method,
            payment_status=PaymentStatus.COMPLETED.value,
            payment_reference=payment_reference,
            cart_id=cart_id,
            created_at=datetime.now(UTC),
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                order_type=order_type,
                line_count=len(lines),
                subtotal=summary.subtotal,
                discount=summary.discount,
                tax=summary.tax,
                total=summary.total,
                coupon_code=coupon_code,
                payment_method=payment_method,
                placed_at=order.created_at,
            )
        )
        return order

    @property
    def ordered_lines(self) -> list:
        return sorted(self.lines, key=lambda line: line.position)

    def to_dict(self) -> dict:
        address = self.delivery_address
        return {
            "id": str(self.id),
            "customer_id": str(self.customer_id),
            "lines": [line.to_dict() for line in self.ordered_lines],
            "order_type": self.order_type,
            "delivery_address": (
                {
                    "street": address.street,
                    "city": address.city,
                    "state": address.state,
                    "zip_code": address.zip_code,
                    "landmark": address.landmark,
                }
                if address
                else None
            ),
            "pricing": {
                "subtotal": self.pricing.subtotal,
                "discount": self.pricing.discount,
                "tax": self.pricing.tax,
                "total": self.pricing.total,
                "currency": self.pricing.currency,
            },
            "coupon_code": self.coupon_code,
            "status": self.status,
            "payment_method": self.payment_method,
            "payment_status": self.payment_status,
            "payment_reference": self.payment_reference,
            "cart_id": str(self.cart_id) if self.cart_id else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@ordering.repository(part_of=Order)
class OrderRepository:
    def find_for_customer(self, customer_id) -> list[Order]:
        """A customer's orders, newest first."""
        orders = self._dao.query.filter(customer_id=str(customer_id)).all().items
        return sorted(orders, key=lambda order: order.created_at, reverse=True)
