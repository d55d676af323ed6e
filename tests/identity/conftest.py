import os

import pytest


@pytest.fixture(scope="session")
def _identity_domain(request):
    """Initialize the identity domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from identity.domain import identity

    identity.init()
    return identity


@pytest.fixture(autouse=True)
def run_around_tests(_identity_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _identity_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def register():
    """Register a customer through the command and return its id."""
    from identity.auth.passwords import hash_password
    from identity.customer.registration import RegisterCustomer
    from protean import current_domain

    def _register(email="asha@example.com", password="s3cret!", name="Asha Rao", phone=None):
        command = RegisterCustomer(name=name, email=email, password_hash=hash_password(password), phone=phone)
        return current_domain.process(command, asynchronous=False)

    return _register
