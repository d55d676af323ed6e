"""Cart line management — commands and handler."""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(default=1, min_value=1)
    size = String(max_length=10)
    added_ingredients = Text()  # JSON: list of ingredient names
    removed_ingredients = Text()  # JSON: list of ingredient names


@ordering.command(part_of="ShoppingCart")
class UpdateCartLineQuantity:
    cart_id = Identifier(required=True)
    line_key = String(required=True, max_length=1000)
    quantity = Integer(required=True)  # Zero or negative removes the line


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    cart_id = Identifier(required=True)
    line_key = String(required=True, max_length=1000)


def _ingredients(value):
    if not value:
        return []
    return json.loads(value) if isinstance(value, str) else value


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartLinesHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        key = cart.add_line(
            product_id=command.product_id,
            name=command.name,
            unit_price=command.unit_price,
            quantity=command.quantity or 1,
            size=command.size,
            added_ingredients=_ingredients(command.added_ingredients),
            removed_ingredients=_ingredients(command.removed_ingredients),
        )
        repo.add(cart)
        return key

    @handle(UpdateCartLineQuantity)
    def update_cart_line_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.update_line_quantity(command.line_key, command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.remove_line(command.line_key)
        repo.add(cart)
