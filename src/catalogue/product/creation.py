"""Product creation — command and handler."""

import json

from protean import handle
from protean.fields import Boolean, Float, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product, ProductCategory


@catalogue.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    description: Text(required=True)
    category: String(required=True, choices=ProductCategory)
    price: Float(required=True, min_value=0.0)
    image: String(required=True, max_length=500)
    nutrition: Text(required=True)  # JSON: {calories, protein, carbs, fat, fiber?}
    customizable: Boolean(default=False)
    ingredients: Text()  # JSON: list of ingredient names
    available: Boolean(default=True)


@catalogue.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        nutrition = json.loads(command.nutrition) if isinstance(command.nutrition, str) else command.nutrition
        ingredients = json.loads(command.ingredients) if isinstance(command.ingredients, str) else command.ingredients

        product = Product.create(
            name=command.name,
            description=command.description,
            category=command.category,
            price=command.price,
            image=command.image,
            nutrition=nutrition,
            customizable=bool(command.customizable),
            ingredients=ingredients,
            available=command.available if command.available is not None else True,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
