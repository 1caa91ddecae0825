"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- RazorpayGateway, built from RAZORPAY_KEY_ID / RAZORPAY_KEY_SECRET
- FakeGateway for development and testing (installed with set_gateway)
"""

import os

from storefront.payments.gateway.port import GatewayConfigurationError, PaymentGateway

_current_gateway: PaymentGateway | None = None


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway.

    Raises:
        GatewayConfigurationError: when no gateway was set and the Razorpay
            keys are missing from the environment.
    """
    global _current_gateway
    if _current_gateway is None:
        key_id = os.getenv("RAZORPAY_KEY_ID")
        key_secret = os.getenv("RAZORPAY_KEY_SECRET")
        if not key_id or not key_secret:
            raise GatewayConfigurationError()

        from storefront.payments.gateway.razorpay_adapter import RazorpayGateway

        _current_gateway = RazorpayGateway(key_id=key_id, key_secret=key_secret)
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
