"""Cart line identity — one key per product + customization combination.

Ingredient lists are compared as sets: ``["Cheese", "Onions"]`` and
``["Onions", "Cheese", "Cheese"]`` produce the same key.
"""

from collections.abc import Iterable


def normalize_ingredients(ingredients: Iterable[str] | None) -> list[str]:
    """Return the ingredient names as a sorted list without blanks or duplicates."""
    if not ingredients:
        return []
    return sorted({name.strip() for name in ingredients if name and name.strip()})


def line_key(
    product_id: str,
    size: str | None = None,
    added_ingredients: Iterable[str] | None = None,
    removed_ingredients: Iterable[str] | None = None,
) -> str:
    """Derive the composite key of a cart line.

    A product without customization is keyed by its bare id. Otherwise the
    key is ``<product_id>|size:<size>|added:<a,b>|removed:<c>``, each segment
    present only when it carries a value.
    """
    added = normalize_ingredients(added_ingredients)
    removed = normalize_ingredients(removed_ingredients)

    parts = [str(product_id)]
    if size:
        parts.append(f"size:{size}")
    if added:
        parts.append(f"added:{','.join(added)}")
    if removed:
        parts.append(f"removed:{','.join(removed)}")

    return "|".join(parts)
