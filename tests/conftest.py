import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Select the config overlay before any domain is imported; each context's
    conftest initializes its own domain and pushes its context per test.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("AUTH_SECRET", "test-secret")
    os.environ.pop("GROQ_API_KEY", None)
    os.environ.pop("PAYMENT_GATEWAY", None)


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def _reset_adapters():
    """Put the payment gateway and language model back to their defaults."""
    yield

    from assistant.llm import reset_language_model
    from ordering.payment import reset_gateway

    reset_gateway()
    reset_language_model()
