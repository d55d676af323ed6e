from datetime import UTC, datetime, timedelta

import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture()
def add_coupon():
    """Persist a coupon, live for the last and next thirty days unless overridden."""
    from ordering.coupon.coupon import Coupon

    def _add(**overrides):
        now = datetime.now(UTC)
        fields = {
            "code": "WELCOME20",
            "name": "Welcome Offer",
            "discount_kind": "percentage",
            "discount_value": 20,
            "min_order_amount": 200,
            "max_discount_amount": 100,
            "valid_from": now - timedelta(days=30),
            "valid_until": now + timedelta(days=30),
        }
        fields.update(overrides)
        coupon = Coupon.create(**fields)
        current_domain.repository_for(Coupon).add(coupon)
        return coupon

    return _add


@pytest.fixture()
def launch_coupons(add_coupon):
    """The three launch coupons: WELCOME20, FLAT50 and BURGER30."""
    return {
        "WELCOME20": add_coupon(),
        "FLAT50": add_coupon(
            code="FLAT50",
            name="Flat ₹50 Off",
            discount_kind="fixed",
            discount_value=50,
            min_order_amount=300,
            max_discount_amount=None,
        ),
        "BURGER30": add_coupon(
            code="BURGER30",
            name="Burger Bonanza",
            discount_value=30,
            min_order_amount=None,
            max_discount_amount=None,
            applicable_categories=["burgers"],
        ),
    }
