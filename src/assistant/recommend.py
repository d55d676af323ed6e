"""Preference-based recommendations."""

from collections import Counter

MAX_RECOMMENDATIONS = 10


def category_frequency(orders: list[dict], products: list[dict]) -> Counter:
    """Units ordered per category across the given orders."""
    categories = {product["id"]: product["category"] for product in products}
    frequency = Counter()
    for order in orders:
        for line in order["lines"]:
            category = categories.get(line["product_id"])
            if category:
                frequency[category] += line["quantity"]
    return frequency


def recommend(products, budget=None, preferences=None, orders=None) -> list[dict]:
    """Up to ten products within budget matching the preferences.

    Products from categories the customer orders most come first; the sort is
    stable so ties keep menu order.
    """
    preferences = preferences or {}
    candidates = list(products)

    if budget:
        candidates = [product for product in candidates if product["price"] <= budget]

    if orders:
        frequency = category_frequency(orders, products)
        candidates.sort(key=lambda product: frequency.get(product["category"], 0), reverse=True)

    if preferences.get("spicy"):
        candidates = [
            product
            for product in candidates
            if "spicy" in product["name"].lower() or "spicy" in product["description"].lower()
        ]
    if preferences.get("vegetarian"):
        candidates = [
            product
            for product in candidates
            if not any(meat in product["name"].lower() for meat in ("chicken", "beef", "meat"))
        ]
    if preferences.get("category"):
        candidates = [product for product in candidates if product["category"] == preferences["category"]]

    return candidates[:MAX_RECOMMENDATIONS]
