"""Domain events for the Customer aggregate."""

from protean.fields import DateTime, Identifier, String

from identity.domain import identity


@identity.event(part_of="Customer")
class CustomerRegistered:
    """A new customer signed up."""

    __version__ = 1

    customer_id: Identifier(required=True)
    email: String(required=True, max_length=254)
    name: String(required=True, max_length=150)
    registered_at: DateTime(required=True)


@identity.event(part_of="Customer")
class CustomerLoggedIn:
    __version__ = 1

    customer_id: Identifier(required=True)
    logged_in_at: DateTime(required=True)
