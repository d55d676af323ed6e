"""Shopping Cart aggregate (CQRS) — server-side cart that converts to an Order at checkout.

Lines are identified by a composite key derived from the product and its
customization, so repeated additions of the same configuration merge into
one line while distinct configurations stay separate.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from ordering.cart.events import (
    CartCleared,
    CartConverted,
    CartCouponAttached,
    CartCouponDetached,
    CartLineAdded,
    CartLineQuantityUpdated,
    CartLineRemoved,
    CartRestored,
)
from ordering.cart.keys import line_key, normalize_ingredients
from ordering.domain import ordering


class CartStatus(Enum):
    ACTIVE = "Active"
    CONVERTED = "Converted"


class ItemSize(Enum):
    SMALL = "small"
    REGULAR = "regular"
    LARGE = "large"


@ordering.value_object(part_of="ShoppingCart")
class Customization:
    """Size choice and ingredient changes for a customizable product.

    Ingredient sets are stored as sorted JSON arrays.
    """

    size = String(choices=ItemSize, max_length=10)
    added_ingredients = Text()
    removed_ingredients = Text()

    @property
    def added(self) -> list[str]:
        return json.loads(self.added_ingredients) if self.added_ingredients else []

    @property
    def removed(self) -> list[str]:
        return json.loads(self.removed_ingredients) if self.removed_ingredients else []


def build_customization(size=None, added_ingredients=None, removed_ingredients=None):
    """Return a Customization, or None when nothing is customized."""
    added = normalize_ingredients(added_ingredients)
    removed = normalize_ingredients(removed_ingredients)
    if not size and not added and not removed:
        return None
    return Customization(
        size=size or None,
        added_ingredients=json.dumps(added) if added else None,
        removed_ingredients=json.dumps(removed) if removed else None,
    )


def key_for(product_id, customization) -> str:
    """Derive the line key for a product and an optional Customization."""
    if customization is None:
        return line_key(product_id)
    return line_key(product_id, customization.size, customization.added, customization.removed)


@ordering.entity(part_of="ShoppingCart")
class CartLine:
    line_key = String(max_length=1000)
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    customization = ValueObject(Customization)
    added_at = DateTime()


@ordering.aggregate
class ShoppingCart:
    customer_id = Identifier()  # Nullable for guest carts
    session_id = String(max_length=255)
    lines = HasMany(CartLine)
    coupon_code = String(max_length=50)
    status = String(choices=CartStatus, default=CartStatus.ACTIVE.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def line_keys_must_be_unique(self):
        keys = [line.line_key for line in self.lines if line.line_key]
        if len(keys) != len(set(keys)):
            raise ValidationError({"lines": ["Each product configuration may appear only once in a cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id=None, session_id=None):
        now = datetime.now(UTC)
        return cls(
            customer_id=customer_id,
            session_id=session_id,
            status=CartStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def find_line(self, key):
        return next((line for line in self.lines if line.line_key == key), None)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def _assert_active(self, action):
        if CartStatus(self.status) != CartStatus.ACTIVE:
            raise ValidationError({"status": [f"Cannot {action} a cart that is not active"]})

    def _ensure_line_keys(self):
        """Assign keys to lines persisted without one, merging any that collide."""
        if all(line.line_key for line in self.lines):
            return

        seen = {}
        with atomic_change(self):
            for line in list(self.lines):
                if not line.line_key:
                    line.line_key = key_for(line.product_id, line.customization)
                if line.line_key in seen:
                    seen[line.line_key].quantity += line.quantity
                    self.remove_lines(line)
                else:
                    seen[line.line_key] = line

    def add_line(
        self,
        product_id,
        name,
        unit_price,
        quantity=1,
        size=None,
        added_ingredients=None,
        removed_ingredients=None,
    ):
        """Add a product configuration, or grow the quantity of its existing line."""
        self._assert_active("add items to")
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        self._ensure_line_keys()

        customization = build_customization(size, added_ingredients, removed_ingredients)
        key = key_for(product_id, customization)
        now = datetime.now(UTC)

        existing = self.find_line(key)
        if existing:
            existing.quantity += quantity
        else:
            self.add_lines(
                CartLine(
                    line_key=key,
                    product_id=product_id,
                    name=name,
                    unit_price=unit_price,
                    quantity=quantity,
                    customization=customization,
                    added_at=now,
                )
            )

        self.updated_at = now

        self.raise_(
            CartLineAdded(
                cart_id=str(self.id),
                line_key=key,
                product_id=str(product_id),
                quantity=quantity,
            )
        )
        return key

    def update_line_quantity(self, key, quantity):
        """Set the quantity of a line; zero or less removes it."""
        self._assert_active("update items in")
        self._ensure_line_keys()

        if quantity <= 0:
            self.remove_line(key)
            return

        line = self.find_line(key)
        if line is None:
            raise ValidationError({"line_key": ["Item not found in cart"]})

        previous_quantity = line.quantity
        line.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineQuantityUpdated(
                cart_id=str(self.id),
                line_key=key,
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_line(self, key):
        """Remove the line with the given key."""
        self._assert_active("remove items from")
        self._ensure_line_keys()

        line = self.find_line(key)
        if line is None:
            raise ValidationError({"line_key": ["Item not found in cart"]})

        self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartLineRemoved(cart_id=str(self.id), line_key=key))

    def clear(self):
        """Empty the cart and forget any previewed coupon."""
        self._assert_active("clear")

        for line in list(self.lines):
            self.remove_lines(line)
        self.coupon_code = None
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id)))

    def restore(self, state):
        """Replace the cart lines with a migrated client-side CartState."""
        self._assert_active("restore")

        now = datetime.now(UTC)
        with atomic_change(self):
            for line in list(self.lines):
                self.remove_lines(line)

            for line_state in state.lines:
                customization = build_customization(
                    line_state.size,
                    line_state.added_ingredients,
                    line_state.removed_ingredients,
                )
                self.add_lines(
                    CartLine(
                        line_key=key_for(line_state.product_id, customization),
                        product_id=line_state.product_id,
                        name=line_state.name,
                        unit_price=line_state.unit_price,
                        quantity=line_state.quantity,
                        customization=customization,
                        added_at=now,
                    )
                )
            self.updated_at = now

        self.raise_(CartRestored(cart_id=str(self.id), line_count=len(state.lines)))

    # -------------------------------------------------------------------
    # Coupon preview
    # -------------------------------------------------------------------
    def attach_coupon(self, coupon_code):
        """Remember a validated coupon code for display pricing."""
        self._assert_active("apply a coupon to")

        self.coupon_code = coupon_code.strip().upper()
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCouponAttached(cart_id=str(self.id), coupon_code=self.coupon_code))

    def detach_coupon(self):
        self._assert_active("remove a coupon from")
        if not self.coupon_code:
            return

        previous = self.coupon_code
        self.coupon_code = None
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCouponDetached(cart_id=str(self.id), coupon_code=previous))

    # -------------------------------------------------------------------
    # Cart lifecycle
    # -------------------------------------------------------------------
    def convert_to_order(self, order_id):
        """Mark cart as converted to an order."""
        if CartStatus(self.status) != CartStatus.ACTIVE:
            raise ValidationError({"status": ["Only active carts can be converted"]})
        if not self.lines:
            raise ValidationError({"cart": ["Cannot convert an empty cart"]})

        lines_snapshot = [{"line_key": line.line_key, "quantity": line.quantity} for line in self.lines]

        self.status = CartStatus.CONVERTED.value
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartConverted(
                cart_id=str(self.id),
                customer_id=str(self.customer_id) if self.customer_id else None,
                order_id=str(order_id),
                lines=json.dumps(lines_snapshot),
            )
        )
