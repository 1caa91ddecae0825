"""Payment gateway port (abstract interface).

Defines the contract for hosted-checkout gateways: the shop creates a
gateway order for the amount due, the customer pays in the gateway's widget,
and the shop verifies the signature the widget hands back.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

MISSING_KEYS_MESSAGE = "Server Configuration Error: Razorpay keys not found"


class GatewayConfigurationError(Exception):
    """The gateway cannot be used because its credentials are not configured."""

    def __init__(self, message: str = MISSING_KEYS_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class GatewayOrder:
    """Result of creating an order on the gateway."""

    success: bool
    gateway_order_id: str | None = None
    amount: int | None = None  # Smallest currency unit (paise)
    currency: str | None = None
    receipt: str | None = None
    status: str | None = None
    failure_reason: str | None = None

    def as_dict(self) -> dict:
        return {
            "id": self.gateway_order_id,
            "amount": self.amount,
            "currency": self.currency,
            "receipt": self.receipt,
            "status": self.status,
        }


def to_minor_units(amount: float) -> int:
    """Rupees to paise, rounded to the nearest paisa."""
    return int(round(float(amount) * 100))


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_order(self, amount: float, currency: str = "INR", receipt: str | None = None) -> GatewayOrder:
        """Create a gateway order for ``amount`` in major units (rupees)."""
        ...

    @abstractmethod
    def verify_payment(self, gateway_order_id: str, payment_id: str, signature: str) -> bool:
        """Check the signature returned by the checkout widget."""
        ...
