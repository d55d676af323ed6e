"""Serializable cart state for carts persisted on the client.

Browsers keep a copy of the cart in local storage. Older copies were
written by a store that did not always record a line key and used camelCase
field names, so every payload is migrated to the current version on load.

Version 0 (browser store layout)::

    {"state": {"items": [{"id": ..., "product": ..., "name": ..., "price": ...,
                          "quantity": ..., "customization": {"size": ...,
                          "addedIngredients": [...], "removedIngredients": [...]}}]},
     "version": 0}

Version 1 (current)::

    {"version": 1, "lines": [{"key": ..., "product_id": ..., "name": ...,
                              "unit_price": ..., "quantity": ...,
                              "customization": {"size": ..., "added_ingredients": [...],
                                                "removed_ingredients": [...]}}]}
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from protean.exceptions import ValidationError

from ordering.cart.keys import line_key, normalize_ingredients

CURRENT_VERSION = 1


@dataclass
class CartLineState:
    product_id: str
    name: str
    unit_price: float
    quantity: int
    size: str | None = None
    added_ingredients: list[str] = field(default_factory=list)
    removed_ingredients: list[str] = field(default_factory=list)
    key: str = ""

    def __post_init__(self):
        self.added_ingredients = normalize_ingredients(self.added_ingredients)
        self.removed_ingredients = normalize_ingredients(self.removed_ingredients)
        self.key = line_key(self.product_id, self.size, self.added_ingredients, self.removed_ingredients)

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "product_id": self.product_id,
            "name": self.name,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
            "customization": {
                "size": self.size,
                "added_ingredients": self.added_ingredients,
                "removed_ingredients": self.removed_ingredients,
            },
        }


@dataclass
class CartState:
    lines: list[CartLineState] = field(default_factory=list)
    version: int = CURRENT_VERSION

    def to_dict(self) -> dict:
        return {"version": self.version, "lines": [line.to_dict() for line in self.lines]}


def _as_list(items) -> list[dict]:
    """Cart lines must be a list of objects."""
    if items is None:
        return []
    if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
        raise ValidationError({"lines": ["Each line must be an object"]})
    return items


def _as_dict(customization) -> dict:
    if customization is None:
        return {}
    if not isinstance(customization, dict):
        raise ValidationError({"lines": ["Customization must be an object"]})
    return customization


def _ingredient_names(names) -> list[str]:
    if names is None:
        return []
    if not isinstance(names, list) or not all(isinstance(name, str) for name in names):
        raise ValidationError({"lines": ["Ingredients must be a list of names"]})
    return names


# ---------------------------------------------------------------------------
# Migrations: each takes a payload of version N and returns version N + 1
# ---------------------------------------------------------------------------
def _migrate_v0_to_v1(payload: dict) -> dict:
    state = payload.get("state") or {}
    if not isinstance(state, dict):
        raise ValidationError({"state": ["Cart state must be a JSON object"]})
    lines = []
    for item in _as_list(state.get("items")):
        customization = _as_dict(item.get("customization"))
        lines.append(
            {
                "key": item.get("id"),
                "product_id": item.get("product"),
                "name": item.get("name"),
                "unit_price": item.get("price"),
                "quantity": item.get("quantity", 1),
                "customization": {
                    "size": customization.get("size"),
                    "added_ingredients": customization.get("addedIngredients") or [],
                    "removed_ingredients": customization.get("removedIngredients") or [],
                },
            }
        )
    return {"version": 1, "lines": lines}


_MIGRATIONS: dict[int, Callable[[dict], dict]] = {
    0: _migrate_v0_to_v1,
}


def _payload_version(payload: dict) -> int:
    version = payload.get("version", 0)
    if not isinstance(version, int) or version < 0:
        raise ValidationError({"version": [f"Unsupported cart state version: {version!r}"]})
    return version


def migrate(payload: dict) -> dict:
    """Bring a persisted payload up to the current version."""
    version = _payload_version(payload)
    if version > CURRENT_VERSION:
        raise ValidationError({"version": [f"Cart state version {version} is newer than supported"]})

    while version < CURRENT_VERSION:
        payload = _MIGRATIONS[version](payload)
        version = _payload_version(payload)
    return payload


def load_cart_state(payload: dict) -> CartState:
    """Parse and migrate a persisted cart payload.

    Lines are re-keyed with the current derivation, lines that collapse onto
    the same key are merged and lines with no positive quantity are dropped.
    """
    if not isinstance(payload, dict):
        raise ValidationError({"state": ["Cart state must be a JSON object"]})

    current = migrate(payload)

    merged: dict[str, CartLineState] = {}
    for raw in _as_list(current.get("lines")):
        try:
            quantity = int(raw.get("quantity") or 0)
        except (TypeError, ValueError):
            raise ValidationError({"lines": ["Quantity must be a whole number"]}) from None
        if quantity <= 0:
            continue
        if not raw.get("product_id") or not raw.get("name") or raw.get("unit_price") is None:
            raise ValidationError({"lines": ["Each line needs a product id, name and unit price"]})
        try:
            unit_price = float(raw["unit_price"])
        except (TypeError, ValueError):
            raise ValidationError({"lines": ["Unit price must be a number"]}) from None

        customization = _as_dict(raw.get("customization"))
        line = CartLineState(
            product_id=str(raw["product_id"]),
            name=raw["name"],
            unit_price=unit_price,
            quantity=quantity,
            size=customization.get("size") or None,
            added_ingredients=_ingredient_names(customization.get("added_ingredients")),
            removed_ingredients=_ingredient_names(customization.get("removed_ingredients")),
        )
        if line.key in merged:
            merged[line.key].quantity += line.quantity
        else:
            merged[line.key] = line

    return CartState(lines=list(merged.values()))


def dump_cart_state(cart) -> dict:
    """Serialize a ShoppingCart in the current persisted layout."""
    lines = []
    for line in cart.lines:
        customization = line.customization
        lines.append(
            CartLineState(
                product_id=str(line.product_id),
                name=line.name,
                unit_price=line.unit_price,
                quantity=line.quantity,
                size=customization.size if customization else None,
                added_ingredients=customization.added if customization else [],
                removed_ingredients=customization.removed if customization else [],
            )
        )
    return CartState(lines=lines).to_dict()
