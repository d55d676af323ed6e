"""Cart coupon preview — commands and handler.

Applying a coupon to a cart validates it against the current subtotal and
remembers the code for price display. Usage is only counted when an order
is placed.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.coupon.validation import validate_coupon
from ordering.domain import ordering
from ordering.pricing import subtotal_of


@ordering.command(part_of="ShoppingCart")
class ApplyCouponToCart:
    """Apply a coupon code to a shopping cart."""

    cart_id = Identifier(required=True)
    coupon_code = String(required=True, max_length=50)


@ordering.command(part_of="ShoppingCart")
class RemoveCouponFromCart:
    cart_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ApplyCouponHandler:
    @handle(ApplyCouponToCart)
    def apply_coupon(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)

        quote = validate_coupon(command.coupon_code, subtotal_of(cart.lines))

        cart.attach_coupon(quote.code)
        repo.add(cart)
        return quote

    @handle(RemoveCouponFromCart)
    def remove_coupon(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.detach_coupon()
        repo.add(cart)
