"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.cart.events import (
    CartCleared,
    CartConverted,
    CartCouponAttached,
    CartLineAdded,
    CartLineQuantityUpdated,
    CartLineRemoved,
    CartRestored,
)
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

_CART_EVENT_CLASSES = {
    "CartLineAdded": CartLineAdded,
    "CartLineQuantityUpdated": CartLineQuantityUpdated,
    "CartLineRemoved": CartLineRemoved,
    "CartCleared": CartCleared,
    "CartRestored": CartRestored,
    "CartCouponAttached": CartCouponAttached,
    "CartConverted": CartConverted,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an active cart", target_fixture="cart")
def active_cart():
    cart = ShoppingCart.create(customer_id="cust-001")
    cart._events.clear()
    return cart


@given("a guest cart", target_fixture="cart")
def guest_cart():
    cart = ShoppingCart.create(session_id="sess-001")
    cart._events.clear()
    return cart


@given(parsers.cfparse('the cart holds {qty:d} "{name}" at {price:g}'), target_fixture="cart")
def cart_holding(cart, qty, name, price):
    cart.add_line(product_id=f"prod-{name.lower().replace(' ', '-')}", name=name, unit_price=price, quantity=qty)
    cart._events.clear()
    return cart


@given("the cart is converted", target_fixture="cart")
def converted_cart(cart):
    if not cart.lines:
        cart.add_line(product_id="prod-001", name="Big Mac", unit_price=199.0)
    cart.convert_to_order("ord-001")
    cart._events.clear()
    return cart


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the cart status is "{status}"'))
def cart_status_is(cart, status):
    assert cart.status == status


@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_one_line(cart, count):
    assert len(cart.lines) == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_n_lines(cart, count):
    assert len(cart.lines) == count


@then(parsers.cfparse("the cart holds {count:d} items"))
def cart_holds_n_items(cart, count):
    assert cart.item_count == count


@then("the cart action fails with a validation error")
def cart_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} cart event is raised"))
def cart_event_raised(cart, event_type):
    event_cls = _CART_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in cart._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in cart._events]}"
