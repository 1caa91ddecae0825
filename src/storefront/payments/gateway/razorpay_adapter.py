"""Razorpay gateway adapter over the Orders REST API."""

import httpx

from storefront.payments.gateway.port import GatewayOrder, PaymentGateway, to_minor_units
from storefront.payments.gateway.signature import signature_matches
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

RAZORPAY_API = "https://api.razorpay.com/v1"


class RazorpayGateway(PaymentGateway):
    """Production Razorpay adapter."""

    def __init__(self, key_id: str, key_secret: str, base_url: str = RAZORPAY_API, timeout: float = 10.0) -> None:
        self.key_id = key_id
        self.key_secret = key_secret
        self.base_url = base_url
        self.timeout = timeout

    def create_order(self, amount: float, currency: str = "INR", receipt: str | None = None) -> GatewayOrder:
        payload = {"amount": to_minor_units(amount), "currency": currency, "receipt": receipt}
        logger.info("razorpay_order_requested", amount=payload["amount"], currency=currency, receipt=receipt)

        response = httpx.post(
            f"{self.base_url}/orders",
            json=payload,
            auth=(self.key_id, self.key_secret),
            timeout=self.timeout,
        )
        data = response.json()

        if response.status_code >= 400:
            reason = (data.get("error") or {}).get("description") or "Razorpay API Error"
            logger.error("razorpay_order_failed", status_code=response.status_code, reason=reason)
            return GatewayOrder(success=False, failure_reason=reason)

        return GatewayOrder(
            success=True,
            gateway_order_id=data.get("id"),
            amount=data.get("amount"),
            currency=data.get("currency"),
            receipt=data.get("receipt"),
            status=data.get("status"),
        )

    def verify_payment(self, gateway_order_id: str, payment_id: str, signature: str) -> bool:
        return signature_matches(self.key_secret, gateway_order_id, payment_id, signature)
