"""Customer login — credential check, command and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from identity.auth.errors import AuthenticationError
from identity.auth.passwords import verify_password
from identity.customer.customer import Customer
from identity.domain import identity


def authenticate(email, password) -> Customer:
    """Return the customer whose credentials match, or raise AuthenticationError.

    Unknown emails and wrong passwords get the same message.
    """
    customer = current_domain.repository_for(Customer).find_by_email(email)
    if customer is None or not verify_password(password, customer.password_hash):
        raise AuthenticationError("Invalid credentials")
    return customer


@identity.command(part_of="Customer")
class LogInCustomer:
    """Record a successful sign-in."""

    customer_id: Identifier(required=True)


@identity.command_handler(part_of=Customer)
class LogInCustomerHandler:
    @handle(LogInCustomer)
    def log_in_customer(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        customer.record_login()
        repo.add(customer)
