"""Cart management — commands and handler.

Handles cart creation, emptying, and restoring a cart persisted on the client.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.cart.state import load_cart_state
from ordering.domain import ordering


@ordering.command(part_of="ShoppingCart")
class CreateCart:
    """Create a new shopping cart for a registered customer or guest session."""

    customer_id = Identifier()  # Optional for guest carts
    session_id = String(max_length=255)


@ordering.command(part_of="ShoppingCart")
class ClearCart:
    cart_id = Identifier(required=True)


@ordering.command(part_of="ShoppingCart")
class RestoreCart:
    """Replace a cart's lines with a state persisted in the browser."""

    cart_id = Identifier(required=True)
    state = Text(required=True)  # JSON: persisted cart payload, any supported version


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        cart = ShoppingCart.create(
            customer_id=command.customer_id,
            session_id=command.session_id,
        )
        current_domain.repository_for(ShoppingCart).add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.clear()
        repo.add(cart)

    @handle(RestoreCart)
    def restore_cart(self, command):
        try:
            payload = json.loads(command.state) if isinstance(command.state, str) else command.state
        except json.JSONDecodeError as exc:
            raise ValidationError({"state": ["Cart state is not valid JSON"]}) from exc
        state = load_cart_state(payload)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.restore(state)
        repo.add(cart)
        return len(state.lines)
