"""Fixtures for end-to-end tests through the assembled application.

Importing ``app`` initializes every domain; the middleware pushes the right
domain context per request, so tests here do not push one themselves.
"""

import os

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="session")
def application(request):
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from app import app

    return app


@pytest.fixture(autouse=True)
def run_around_tests(application):
    """Cleanup every domain's infrastructure after each test."""
    yield

    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    for domain in (identity, catalogue, ordering):
        with domain.domain_context():
            for _, provider in domain.providers.items():
                provider._data_reset()
            for _, broker in domain.brokers.items():
                broker._data_reset()
            domain.event_store.store._data_reset()


@pytest.fixture()
def client(application):
    return TestClient(application)


@pytest.fixture()
def seeded():
    """Demo menu, stores and launch coupons. Returns ids by name or code."""
    from seed import seed_all

    return seed_all()


@pytest.fixture()
def signed_in(client):
    """Sign up a customer; the client keeps the token cookie."""
    response = client.post(
        "/auth/signup",
        json={"name": "Asha Rao", "email": "asha@example.com", "password": "s3cret!"},
    )
    assert response.status_code == 201
    return response.json()
