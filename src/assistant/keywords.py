"""Keyword responder used when no language model is available.

Rules are checked in order and the first match wins: budget, spicy,
vegetarian, healthy, burgers, drinks, order history, then a default menu
sample.
"""

import re
from dataclasses import dataclass, field

from assistant.menu import product_card

MAX_PRODUCTS = 5

_BUDGET = re.compile(r"₹?\s*(\d+)")
_MEAT = re.compile(r"(chicken|beef|meat|pork)", re.IGNORECASE)

DEFAULT_SUGGESTIONS = [
    {"type": "suggestion", "text": "Show me items under ₹200"},
    {"type": "suggestion", "text": "I want something spicy"},
    {"type": "suggestion", "text": "Show vegetarian options"},
]


@dataclass
class ChatReply:
    text: str
    products: list[dict] = field(default_factory=list)
    suggestions: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"text": self.text, "products": self.products, "suggestions": self.suggestions}


def reorder_suggestions(orders: list[dict]) -> list[dict]:
    return [{"type": "reorder", "order_id": order["id"], "items": order["lines"]} for order in orders]


def _cards(products) -> list[dict]:
    return [product_card(product) for product in list(products)[:MAX_PRODUCTS]]


def _mentions(product, word) -> bool:
    return word in product["name"].lower() or word in product["description"].lower()


def keyword_reply(message: str, products: list[dict], orders: list[dict], authenticated: bool) -> ChatReply:
    msg = message.lower()

    if any(word in msg for word in ("budget", "price", "under", "₹")):
        match = _BUDGET.search(msg)
        budget = int(match.group(1)) if match else None
        if budget:
            return ChatReply(
                text=f"Here are some great options under ₹{budget}:",
                products=_cards(product for product in products if product["price"] <= budget),
            )
        return ChatReply(text='Could you please specify your budget? For example, "under ₹200"')

    if "spicy" in msg:
        return ChatReply(
            text="Here are some spicy options for you:",
            products=_cards(product for product in products if _mentions(product, "spicy")),
        )

    if "vegetarian" in msg or "veg" in msg:
        return ChatReply(
            text="Here are some vegetarian options:",
            products=_cards(product for product in products if not _MEAT.search(product["name"])),
        )

    if any(word in msg for word in ("healthy", "nutrition", "low calorie")):
        by_calories = sorted(products, key=lambda product: (product["nutrition"] or {}).get("calories", 0))
        return ChatReply(text="Here are some healthier options with lower calories:", products=_cards(by_calories))

    if "burger" in msg:
        return ChatReply(
            text="Here are our burger options:",
            products=_cards(product for product in products if product["category"] == "burgers"),
        )

    if "drink" in msg or "beverage" in msg:
        return ChatReply(
            text="Here are our beverage options:",
            products=_cards(product for product in products if product["category"] == "beverages"),
        )

    if "order history" in msg or "previous orders" in msg:
        if not authenticated:
            return ChatReply(text="Please login to view your order history.")
        return ChatReply(
            text=f"You have {len(orders)} recent orders. Would you like to reorder any?",
            suggestions=reorder_suggestions(orders),
        )

    return ChatReply(
        text=(
            "Here are some popular items. You can ask me to suggest items by budget, "
            "preferences (spicy, vegetarian, healthy), or browse by category (burgers, beverages, etc.)"
        ),
        products=_cards(products),
        suggestions=list(DEFAULT_SUGGESTIONS),
    )
