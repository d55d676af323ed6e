"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="ShoppingCart")
class CartLineAdded:
    """A product configuration was added to the cart (or its quantity grew)."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_key = String(required=True, max_length=1000)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartLineQuantityUpdated:
    """The quantity of a cart line was changed."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_key = String(required=True, max_length=1000)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartLineRemoved:
    """A line was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_key = String(required=True, max_length=1000)


@ordering.event(part_of="ShoppingCart")
class CartCleared:
    __version__ = 1

    cart_id = Identifier(required=True)


@ordering.event(part_of="ShoppingCart")
class CartRestored:
    """Cart lines were replaced from a persisted client-side state."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_count = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartCouponAttached:
    """A validated coupon code was attached to the cart for price preview."""

    __version__ = 1

    cart_id = Identifier(required=True)
    coupon_code = String(required=True)


@ordering.event(part_of="ShoppingCart")
class CartCouponDetached:
    __version__ = 1

    cart_id = Identifier(required=True)
    coupon_code = String(required=True)


@ordering.event(part_of="ShoppingCart")
class CartConverted:
    """A shopping cart was converted into an order at checkout."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier()
    order_id = Identifier(required=True)
    lines = Text(required=True)  # JSON: list of {line_key, quantity}
