"""Mock payment gateway.

Approves every authorization unless configured to decline, and records each
call so tests can assert on what checkout asked for.
"""

from uuid import uuid4

from ordering.payment.port import AuthorizationResult, PaymentGateway


class MockPaymentGateway(PaymentGateway):
    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Payment declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Payment declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def authorize(
        self,
        amount: float,
        currency: str,
        payment_method: str,
        idempotency_key: str,
    ) -> AuthorizationResult:
        self.calls.append(
            {
                "amount": amount,
                "currency": currency,
                "payment_method": payment_method,
                "idempotency_key": idempotency_key,
            }
        )

        if self.should_succeed:
            return AuthorizationResult(
                success=True,
                reference=f"mock_auth_{uuid4().hex[:12]}",
                status="authorized",
            )
        return AuthorizationResult(success=False, status="declined", failure_reason=self.failure_reason)
