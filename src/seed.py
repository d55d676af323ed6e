"""Demo menu, coupons and stores.

Seeding goes through the same commands the application uses, so every record
passes the aggregates' validation. Records that already exist (by product
name, coupon code or store name) are skipped.
"""

import json
from datetime import UTC, datetime, timedelta

import structlog

from catalogue.domain import catalogue
from catalogue.product.creation import AddProduct
from catalogue.product.product import Product
from catalogue.store.registration import AddStore
from catalogue.store.store import Store
from ordering.coupon.coupon import Coupon
from ordering.coupon.management import CreateCoupon
from ordering.domain import ordering

logger = structlog.get_logger(__name__)

PRODUCTS = [
    {
        "name": "Big Mac",
        "description": "Two all-beef patties, special sauce, lettuce, cheese, pickles, onions on a sesame seed bun",
        "category": "burgers",
        "price": 199,
        "image": "https://images.unsplash.com/photo-1568901346375-23c9450c58cd?w=400",
        "nutrition": {"calories": 550, "protein": 25, "carbs": 45, "fat": 33, "fiber": 3},
        "customizable": True,
        "ingredients": ["Beef Patty", "Lettuce", "Cheese", "Pickles", "Onions", "Special Sauce"],
    },
    {
        "name": "McChicken",
        "description": "Crispy chicken patty with mayonnaise and lettuce",
        "category": "burgers",
        "price": 149,
        "image": "https://images.unsplash.com/photo-1606755962773-d324e0a13086?w=400",
        "nutrition": {"calories": 350, "protein": 14, "carbs": 35, "fat": 16, "fiber": 2},
        "customizable": True,
        "ingredients": ["Chicken Patty", "Lettuce", "Mayonnaise"],
    },
    {
        "name": "Veggie Burger",
        "description": "Delicious veggie patty with fresh vegetables",
        "category": "burgers",
        "price": 129,
        "image": "https://images.unsplash.com/photo-1528735602780-2552fd46c7af?w=400",
        "nutrition": {"calories": 320, "protein": 12, "carbs": 42, "fat": 10, "fiber": 5},
        "customizable": True,
        "ingredients": ["Veggie Patty", "Lettuce", "Tomato", "Onions", "Mayonnaise"],
    },
    {
        "name": "French Fries",
        "description": "Golden crispy French fries",
        "category": "fries",
        "price": 79,
        "image": "https://images.unsplash.com/photo-1573080496219-bb080dd4f877?w=400",
        "nutrition": {"calories": 230, "protein": 3, "carbs": 30, "fat": 11, "fiber": 3},
    },
    {
        "name": "Chicken Nuggets (6 pc)",
        "description": "Crispy chicken nuggets",
        "category": "fries",
        "price": 149,
        "image": "https://images.unsplash.com/photo-1562967914-608f82629710?w=400",
        "nutrition": {"calories": 280, "protein": 15, "carbs": 16, "fat": 17, "fiber": 1},
    },
    {
        "name": "Coca Cola",
        "description": "Refreshing Coca Cola",
        "category": "beverages",
        "price": 59,
        "image": "https://images.unsplash.com/photo-1554866585-cd94860890b7?w=400",
        "nutrition": {"calories": 150, "protein": 0, "carbs": 39, "fat": 0, "fiber": 0},
    },
    {
        "name": "Orange Juice",
        "description": "Fresh orange juice",
        "category": "beverages",
        "price": 69,
        "image": "https://images.unsplash.com/photo-1600271886742-f049cd451bba?w=400",
        "nutrition": {"calories": 110, "protein": 2, "carbs": 26, "fat": 0, "fiber": 0},
    },
    {
        "name": "McFlurry",
        "description": "Creamy soft serve ice cream with your favorite toppings",
        "category": "desserts",
        "price": 99,
        "image": "https://images.unsplash.com/photo-1563805042-7684c019e1cb?w=400",
        "nutrition": {"calories": 330, "protein": 7, "carbs": 45, "fat": 13, "fiber": 1},
        "customizable": True,
        "ingredients": ["Ice Cream", "Oreo Cookies", "Caramel Sauce"],
    },
]

_EVERY_DAY = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

STORES = [
    {
        "name": "GoldenBite Downtown",
        "address": {
            "street": "123 Main Street",
            "city": "Mumbai",
            "state": "Maharashtra",
            "zip_code": "400001",
            "landmark": "Near Central Station",
        },
        "location": {"latitude": 19.0760, "longitude": 72.8777},
        "phone": "+91 22 1234 5678",
        "email": "downtown@goldenbite.example",
        "timing": {"open": "07:00", "close": "23:00"},
        "days_open": _EVERY_DAY,
        "services": {"dine_in": True, "takeaway": True, "delivery": True},
    },
    {
        "name": "GoldenBite Mall Location",
        "address": {
            "street": "456 Shopping Avenue",
            "city": "Mumbai",
            "state": "Maharashtra",
            "zip_code": "400052",
            "landmark": "Inside City Mall",
        },
        "location": {"latitude": 19.1334, "longitude": 72.8267},
        "phone": "+91 22 2345 6789",
        "email": "mall@goldenbite.example",
        "timing": {"open": "10:00", "close": "22:00"},
        "days_open": _EVERY_DAY,
        "services": {"dine_in": True, "takeaway": True, "delivery": False},
    },
    {
        "name": "GoldenBite Airport",
        "address": {
            "street": "Terminal 2",
            "city": "Mumbai",
            "state": "Maharashtra",
            "zip_code": "400099",
            "landmark": "Domestic Terminal",
        },
        "location": {"latitude": 19.0896, "longitude": 72.8656},
        "phone": "+91 22 3456 7890",
        "timing": {"open": "00:00", "close": "23:59"},
        "days_open": _EVERY_DAY,
        "services": {"dine_in": True, "takeaway": True, "delivery": False},
    },
]


def coupons(now=None) -> list[dict]:
    """Launch coupons, valid from ``now``."""
    now = now or datetime.now(UTC)
    return [
        {
            "code": "WELCOME20",
            "name": "Welcome Offer",
            "description": "Get 20% off on your first order",
            "discount_kind": "percentage",
            "discount_value": 20,
            "min_order_amount": 200,
            "max_discount_amount": 100,
            "valid_from": now,
            "valid_until": now + timedelta(days=90),
        },
        {
            "code": "FLAT50",
            "name": "Flat ₹50 Off",
            "description": "Get flat ₹50 off on orders above ₹300",
            "discount_kind": "fixed",
            "discount_value": 50,
            "min_order_amount": 300,
            "valid_from": now,
            "valid_until": now + timedelta(days=30),
        },
        {
            "code": "BURGER30",
            "name": "Burger Special",
            "description": "Get 30% off on all burgers",
            "discount_kind": "percentage",
            "discount_value": 30,
            "applicable_categories": ["burgers"],
            "valid_from": now,
            "valid_until": now + timedelta(days=60),
        },
    ]


def seed_catalogue() -> dict:
    """Add missing demo products and stores. Returns ids by name."""
    ids = {}
    with catalogue.domain_context():
        products = catalogue.repository_for(Product)
        for data in PRODUCTS:
            if products.find_by_name(data["name"]):
                continue
            command = AddProduct(
                **{key: value for key, value in data.items() if key not in ("nutrition", "ingredients")},
                nutrition=json.dumps(data["nutrition"]),
                ingredients=json.dumps(data.get("ingredients", [])),
            )
            ids[data["name"]] = catalogue.process(command, asynchronous=False)

        stores = catalogue.repository_for(Store)
        for data in STORES:
            if stores.find_by_name(data["name"]):
                continue
            command = AddStore(
                name=data["name"],
                address=json.dumps(data["address"]),
                location=json.dumps(data["location"]),
                phone=data["phone"],
                email=data.get("email"),
                timing=json.dumps(data["timing"]),
                days_open=json.dumps(data["days_open"]),
                services=json.dumps(data["services"]),
            )
            ids[data["name"]] = catalogue.process(command, asynchronous=False)

    logger.info("Catalogue seeded", added=len(ids))
    return ids


def seed_coupons(now=None) -> dict:
    """Add missing launch coupons. Returns ids by code."""
    ids = {}
    with ordering.domain_context():
        repo = ordering.repository_for(Coupon)
        for data in coupons(now):
            if repo.find_by_code(data["code"]):
                continue
            command = CreateCoupon(
                **{key: value for key, value in data.items() if key != "applicable_categories"},
                applicable_categories=json.dumps(data.get("applicable_categories", [])),
            )
            ids[data["code"]] = ordering.process(command, asynchronous=False)

    logger.info("Coupons seeded", added=len(ids))
    return ids


def seed_all(now=None) -> dict:
    return {**seed_catalogue(), **seed_coupons(now)}
