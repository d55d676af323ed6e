"""Customer aggregate — a storefront account that can sign in and place orders."""

from datetime import UTC, datetime

from protean.fields import DateTime, String

from identity.domain import identity
from identity.shared.email import EmailAddress, normalize_email


@identity.aggregate
class Customer:
    email: String(required=True, max_length=254, unique=True)
    name: String(required=True, max_length=150)
    phone: String(max_length=20)
    password_hash: String(required=True, max_length=255)
    registered_at: DateTime()
    last_login_at: DateTime()

    @classmethod
    def register(cls, name, email, password_hash, phone=None):
        from identity.customer.events import CustomerRegistered

        address = EmailAddress(address=normalize_email(email)).address
        now = datetime.now(UTC)

        customer = cls(
            email=address,
            name=(name or "").strip(),
            phone=phone,
            password_hash=password_hash,
            registered_at=now,
        )
        customer.raise_(
            CustomerRegistered(
                customer_id=str(customer.id),
                email=address,
                name=customer.name,
                registered_at=now,
            )
        )
        return customer

    def record_login(self):
        from identity.customer.events import CustomerLoggedIn

        self.last_login_at = datetime.now(UTC)
        self.raise_(CustomerLoggedIn(customer_id=str(self.id), logged_in_at=self.last_login_at))

    def to_profile(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
        }


@identity.repository(part_of=Customer)
class CustomerRepository:
    def find_by_email(self, email) -> Customer | None:
        matches = self._dao.query.filter(email=normalize_email(email)).all().items
        return matches[0] if matches else None
