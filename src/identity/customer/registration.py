"""Customer registration — command and handler.

Passwords are hashed before the command is built; commands never carry a
plain-text password.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.customer.customer import Customer
from identity.domain import identity


@identity.command(part_of="Customer")
class RegisterCustomer:
    """Create a new customer account."""

    name: String(required=True, max_length=150)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)
    phone: String(max_length=20)


@identity.command_handler(part_of=Customer)
class RegisterCustomerHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        repo = current_domain.repository_for(Customer)
        if repo.find_by_email(command.email):
            raise ValidationError({"email": ["User already exists"]})

        customer = Customer.register(
            name=command.name,
            email=command.email,
            password_hash=command.password_hash,
            phone=command.phone,
        )
        repo.add(customer)
        return str(customer.id)
