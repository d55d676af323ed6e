"""Domain events for the Store aggregate."""

from protean.fields import Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Store")
class StoreAdded:
    __version__ = 1

    store_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    zip_code: String(required=True, max_length=20)
