"""Read-side queries over the menu."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.product.product import Product


def list_products(category=None) -> list[Product]:
    return current_domain.repository_for(Product).available(category)


def get_product(product_id) -> Product:
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"_entity": ["Product not found"]}) from None


def filter_by_nutrition(max_calories=None, max_fat=None, high_protein=False, low_carbs=False) -> list[Product]:
    """Available products within nutrition limits.

    ``high_protein`` sorts by protein, most first; ``low_carbs`` then sorts by
    carbs, fewest first. When both are set the carb order wins and protein
    breaks ties.
    """
    products = list_products()

    if max_calories is not None:
        products = [product for product in products if product.nutrition.calories <= max_calories]
    if max_fat is not None:
        products = [product for product in products if product.nutrition.fat <= max_fat]

    if high_protein:
        products.sort(key=lambda product: product.nutrition.protein, reverse=True)
    if low_carbs:
        products.sort(key=lambda product: product.nutrition.carbs)

    return products
