"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductAdded:
    """A product was added to the menu."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    category: String(required=True)
    price: Float(required=True)
    created_at: DateTime(required=True)
