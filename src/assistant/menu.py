"""Snapshots of the menu and a customer's orders for the assistant.

The assistant is not a bounded context of its own. It reads the catalogue and
ordering domains, each inside its own domain context, and works on plain
dictionaries from then on.
"""

from catalogue.domain import catalogue
from catalogue.product.browsing import list_products
from ordering.domain import ordering
from ordering.order.history import list_orders


def available_products() -> list[dict]:
    with catalogue.domain_context():
        return [product.to_dict() for product in list_products()]


def recent_orders(customer_id, limit=5) -> list[dict]:
    """A customer's most recent orders, newest first."""
    if not customer_id:
        return []
    with ordering.domain_context():
        return [order.to_dict() for order in list_orders(customer_id)[:limit]]


def product_card(product: dict) -> dict:
    """The short product shape the chat widget renders."""
    return {
        "id": product["id"],
        "name": product["name"],
        "description": product["description"],
        "price": product["price"],
        "image": product["image"],
        "category": product["category"],
    }
