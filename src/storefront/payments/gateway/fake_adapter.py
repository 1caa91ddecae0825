"""Configurable fake payment gateway for development and testing.

Orders are created in memory and signatures are checked with a local key
secret, so tests can sign payments the way the real checkout widget would.
"""

from uuid import uuid4

from storefront.payments.gateway.port import GatewayOrder, PaymentGateway, to_minor_units
from storefront.payments.gateway.signature import payment_signature, signature_matches


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self, key_secret: str = "fake_key_secret") -> None:
        self.key_secret = key_secret
        self.should_succeed: bool = True
        self.failure_reason: str = "Razorpay API Error"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Razorpay API Error") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def sign(self, gateway_order_id: str, payment_id: str) -> str:
        """The signature a successful checkout widget would return."""
        return payment_signature(self.key_secret, gateway_order_id, payment_id)

    def create_order(self, amount: float, currency: str = "INR", receipt: str | None = None) -> GatewayOrder:
        self.calls.append({"method": "create_order", "amount": amount, "currency": currency, "receipt": receipt})

        if not self.should_succeed:
            return GatewayOrder(success=False, failure_reason=self.failure_reason)

        return GatewayOrder(
            success=True,
            gateway_order_id=f"order_fake{uuid4().hex[:14]}",
            amount=to_minor_units(amount),
            currency=currency,
            receipt=receipt,
            status="created",
        )

    def verify_payment(self, gateway_order_id: str, payment_id: str, signature: str) -> bool:
        self.calls.append(
            {
                "method": "verify_payment",
                "gateway_order_id": gateway_order_id,
                "payment_id": payment_id,
            }
        )
        return signature_matches(self.key_secret, gateway_order_id, payment_id, signature)
