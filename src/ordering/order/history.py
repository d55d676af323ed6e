"""Order history queries for the customer who placed the orders."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.order.order import Order


def list_orders(customer_id) -> list[Order]:
    return current_domain.repository_for(Order).find_for_customer(customer_id)


def get_order(customer_id, order_id) -> Order:
    """Fetch one order, hiding orders that belong to other customers."""
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        order = None

    if order is None or str(order.customer_id) != str(customer_id):
        raise ObjectNotFoundError({"_entity": ["Order not found"]})
    return order
