import pytest


def _product(name, category, price, calories, description="", customizable=False):
    return {
        "id": f"prod-{name.lower().replace(' ', '-')}",
        "name": name,
        "description": description or f"Our {name}",
        "category": category,
        "price": price,
        "image": f"https://example.com/{name.lower().replace(' ', '-')}.jpg",
        "nutrition": {"calories": calories, "protein": 10, "carbs": 30, "fat": 10, "fiber": 1},
        "customizable": customizable,
        "ingredients": [],
        "available": True,
    }


@pytest.fixture()
def products():
    return [
        _product("Big Mac", "burgers", 199, 550, "Two all-beef patties", customizable=True),
        _product("Spicy Paneer Burger", "burgers", 169, 420, "Paneer patty with a spicy sauce"),
        _product("McChicken", "burgers", 149, 350, "Crispy chicken patty"),
        _product("Veggie Burger", "burgers", 129, 320, "Plant-based patty"),
        _product("French Fries", "fries", 79, 230, "Golden crispy fries"),
        _product("Coca Cola", "beverages", 59, 150, "Chilled soft drink"),
        _product("McFlurry", "desserts", 99, 330, "Soft serve with toppings"),
    ]


@pytest.fixture()
def orders():
    return [
        {
            "id": "ord-002",
            "lines": [{"product_id": "prod-coca-cola", "name": "Coca Cola", "quantity": 3}],
            "pricing": {"total": 185.85},
        },
        {
            "id": "ord-001",
            "lines": [{"product_id": "prod-big-mac", "name": "Big Mac", "quantity": 1}],
            "pricing": {"total": 208.95},
        },
    ]
