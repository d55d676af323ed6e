"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations. Only the
mock gateway exists: checkout authorizes amounts but never settles them.
"""

import os

from ordering.payment.port import PaymentGateway

_current_gateway: PaymentGateway | None = None


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, selected by PAYMENT_GATEWAY."""
    global _current_gateway
    if _current_gateway is None:
        adapter = os.environ.get("PAYMENT_GATEWAY", "mock")
        if adapter == "mock":
            from ordering.payment.fake_adapter import MockPaymentGateway

            _current_gateway = MockPaymentGateway()
        else:
            raise ValueError(f"Unknown payment gateway: {adapter}")
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
