"""Product aggregate with nutrition facts and size-based pricing."""

import json
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, String, Text, ValueObject

from catalogue.domain import catalogue

# Price multiplier per size; regular is the listed price
_SIZE_MULTIPLIERS = {"small": Decimal("0.85"), "regular": Decimal("1"), "large": Decimal("1.15")}


class ProductCategory(Enum):
    BURGERS = "burgers"
    FRIES = "fries"
    BEVERAGES = "beverages"
    DESSERTS = "desserts"


@catalogue.value_object(part_of="Product")
class Nutrition:
    """Nutrition facts per serving, in kcal and grams."""

    calories: Float(required=True, min_value=0.0)
    protein: Float(required=True, min_value=0.0)
    carbs: Float(required=True, min_value=0.0)
    fat: Float(required=True, min_value=0.0)
    fiber: Float(min_value=0.0)

    def to_dict(self) -> dict:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "fiber": self.fiber,
        }


@catalogue.aggregate
class Product:
    """A menu item."""

    name: String(required=True, max_length=255)
    description: Text(required=True)
    category: String(required=True, choices=ProductCategory)
    price: Float(required=True, min_value=0.0)
    image: String(required=True, max_length=500)
    nutrition: ValueObject(Nutrition, required=True)
    customizable: Boolean(default=False)
    ingredients: Text()  # JSON array
    available: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(
        cls,
        name,
        description,
        category,
        price,
        image,
        nutrition,
        customizable=False,
        ingredients=None,
        available=True,
    ):
        from catalogue.product.events import ProductAdded

        now = datetime.now()
        product = cls(
            name=name,
            description=description,
            category=category,
            price=price,
            image=image,
            nutrition=Nutrition(**nutrition) if isinstance(nutrition, dict) else nutrition,
            customizable=customizable,
            ingredients=json.dumps(ingredients or []),
            available=available,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=name,
                category=category,
                price=price,
                created_at=now,
            )
        )
        return product

    @property
    def ingredient_list(self) -> list[str]:
        return json.loads(self.ingredients) if self.ingredients else []

    def price_for_size(self, size=None) -> float:
        """Listed price adjusted for a size, rounded half-up to whole rupees.

        Small is 15% cheaper and large 15% dearer than regular.
        """
        size = size or "regular"
        if size not in _SIZE_MULTIPLIERS:
            raise ValidationError({"size": [f"Unknown size '{size}'"]})
        if size == "regular":
            return self.price

        adjusted = Decimal(str(self.price)) * _SIZE_MULTIPLIERS[size]
        return float(adjusted.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "price": self.price,
            "image": self.image,
            "nutrition": self.nutrition.to_dict() if self.nutrition else None,
            "customizable": self.customizable,
            "ingredients": self.ingredient_list,
            "available": self.available,
        }


@catalogue.repository(part_of=Product)
class ProductRepository:
    def available(self, category=None) -> list[Product]:
        """Products currently on the menu, optionally within one category."""
        query = self._dao.query.filter(available=True)
        if category:
            query = query.filter(category=category)
        return sorted(query.all().items, key=lambda product: product.name)

    def find_by_name(self, name) -> Product | None:
        matches = self._dao.query.filter(name=name).all().items
        return matches[0] if matches else None
