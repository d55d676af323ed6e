"""Chat helper: ask the language model about the menu, or fall back to keywords."""

import json

import structlog

from assistant.keywords import DEFAULT_SUGGESTIONS, ChatReply, keyword_reply, reorder_suggestions
from assistant.llm import get_language_model
from assistant.llm.port import LanguageModelError
from assistant.menu import available_products, product_card, recent_orders

logger = structlog.get_logger(__name__)

MAX_PRODUCTS = 5
_HISTORY_PHRASES = ("order history", "previous orders", "my orders")


def _menu_line(product: dict) -> str:
    calories = (product.get("nutrition") or {}).get("calories") or "N/A"
    line = (
        f"- {product['name']} (₹{product['price']:g}): {product['description']}. "
        f"Category: {product['category']}. Calories: {calories}."
    )
    if product.get("customizable"):
        line += " Customizable."
    return line


def build_system_prompt(products: list[dict], orders: list[dict]) -> str:
    menu = "\n".join(_menu_line(product) for product in products)
    prompt = f"""You are a friendly AI ordering assistant for GoldenBite. Help customers find the perfect meal based on their preferences, budget, dietary restrictions, or cravings.

Available Products:
{menu}

Your role:
1. Understand customer requests (budget, preferences, dietary needs, cravings)
2. Recommend relevant products from the list above
3. Be conversational, friendly, and helpful
4. If asked about specific products, provide details from the product list
5. If asked about order history, mention that the user needs to be logged in
6. Keep responses concise (2-3 sentences max) unless asked for details
7. Always mention product names and prices when recommending

When recommending products, format your response as:
- Main response text
- Then list product names that match (comma-separated, use exact names from the list)
"""
    if orders:
        history = [{"items": order["lines"], "total": order["pricing"]["total"]} for order in orders]
        prompt += f"\nUser's recent orders: {json.dumps(history)}\n"
    return prompt + "\nRespond naturally and helpfully."


def model_reply(model, message, products, orders, authenticated) -> ChatReply:
    text = model.complete(build_system_prompt(products, orders), message)

    lowered = text.lower()
    mentioned = [product for product in products if product["name"].lower() in lowered][:MAX_PRODUCTS]

    suggestions = []
    if authenticated and any(phrase in message.lower() for phrase in _HISTORY_PHRASES):
        suggestions = reorder_suggestions(orders)
    elif not mentioned:
        suggestions = list(DEFAULT_SUGGESTIONS)

    return ChatReply(text=text, products=[product_card(product) for product in mentioned], suggestions=suggestions)


def respond(message: str, customer_id=None) -> ChatReply:
    """Answer a chat message, personalised with recent orders when signed in."""
    products = available_products()
    orders = recent_orders(customer_id)
    authenticated = customer_id is not None

    model = get_language_model()
    if model is not None:
        try:
            return model_reply(model, message, products, orders, authenticated)
        except LanguageModelError as exc:
            logger.warning("Language model unavailable, using keyword replies", error=str(exc))

    return keyword_reply(message, products, orders, authenticated)
