"""Payment gateway port (abstract interface)."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from protean.exceptions import ValidationError


class PaymentDeclined(ValidationError):
    """The gateway refused to authorize a payment."""


@dataclass(frozen=True)
class AuthorizationResult:
    """Result of a payment authorization attempt."""

    success: bool
    reference: str | None = None
    status: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def authorize(
        self,
        amount: float,
        currency: str,
        payment_method: str,
        idempotency_key: str,
    ) -> AuthorizationResult:
        """Authorize an amount for an order about to be placed."""
        ...
