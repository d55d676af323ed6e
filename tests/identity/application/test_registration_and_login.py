"""Application tests for registration and login."""

import pytest
from identity.auth.errors import AuthenticationError
from identity.auth.passwords import verify_password
from identity.customer.customer import Customer
from identity.customer.login import LogInCustomer, authenticate
from protean import current_domain
from protean.exceptions import ValidationError


class TestRegisterCustomer:
    def test_register_persists(self, register):
        customer_id = register()
        customer = current_domain.repository_for(Customer).get(customer_id)
        assert customer.email == "asha@example.com"
        assert verify_password("s3cret!", customer.password_hash)

    def test_duplicate_email_is_rejected(self, register):
        register()
        with pytest.raises(ValidationError) as exc:
            register(email="ASHA@example.com")
        assert exc.value.messages == {"email": ["User already exists"]}


class TestAuthenticate:
    def test_valid_credentials(self, register):
        customer_id = register()
        assert authenticate("Asha@Example.com", "s3cret!").id == customer_id

    def test_wrong_password(self, register):
        register()
        with pytest.raises(AuthenticationError) as exc:
            authenticate("asha@example.com", "wrong")
        assert exc.value.message == "Invalid credentials"

    def test_unknown_email(self):
        with pytest.raises(AuthenticationError):
            authenticate("nobody@example.com", "s3cret!")


def test_login_is_recorded(register):
    customer_id = register()
    current_domain.process(LogInCustomer(customer_id=customer_id), asynchronous=False)
    assert current_domain.repository_for(Customer).get(customer_id).last_login_at is not None
