"""Razorpay checkout actions: create a gateway order, verify a payment.

When a shop order id is given, the gateway order is bound to that order and
must charge exactly its total; a verified payment is then only accepted for the
gateway order bound to it.
"""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.order.order import Order
from storefront.order.payment import AttachGatewayOrder, RecordPayment
from storefront.payments.gateway import get_gateway
from storefront.payments.gateway.port import to_minor_units
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CREATE_ORDER = "create-order"
VERIFY_PAYMENT = "verify-payment"


def _owned_order(order_id, customer_id) -> Order:
    order = current_domain.repository_for(Order).get(order_id)
    if customer_id is not None and str(order.customer_id) != str(customer_id):
        logger.warning("payment_for_foreign_order", order_id=str(order_id), customer_id=str(customer_id))
        raise ValidationError({"order_id": ["You can only pay for your own orders"]})
    return order


def create_gateway_order(
    amount,
    currency: str = "INR",
    receipt: str | None = None,
    order_id: str | None = None,
    customer_id: str | None = None,
) -> dict:
    order = None
    if order_id:
        order = _owned_order(order_id, customer_id)
        if amount is None:
            amount = order.total
        elif to_minor_units(amount) != to_minor_units(order.total):
            raise ValidationError({"amount": [f"Amount does not match the order total of {order.total:.2f}"]})

    if amount is None or float(amount) <= 0:
        raise ValidationError({"amount": ["Amount must be greater than zero"]})

    result = get_gateway().create_order(float(amount), currency=currency or "INR", receipt=receipt)
    if not result.success:
        raise ValidationError({"gateway": [result.failure_reason or "Razorpay API Error"]})

    if order is not None:
        current_domain.process(
            AttachGatewayOrder(order_id=order_id, gateway_order_id=result.gateway_order_id, amount=result.amount),
            asynchronous=False,
        )

    logger.info(
        "gateway_order_created", gateway_order_id=result.gateway_order_id, amount=result.amount, order_id=order_id
    )
    return result.as_dict()


def verify_payment(
    gateway_order_id: str,
    payment_id: str,
    signature: str,
    order_id: str | None = None,
    customer_id: str | None = None,
) -> dict:
    """Validate the widget signature and, given a shop order id, mark it paid."""
    if not gateway_order_id or not payment_id:
        raise ValidationError({"payment_details": ["razorpay_order_id and razorpay_payment_id are required"]})

    if order_id:
        _owned_order(order_id, customer_id)

    if not get_gateway().verify_payment(gateway_order_id, payment_id, signature):
        logger.warning("payment_signature_invalid", gateway_order_id=gateway_order_id, payment_id=payment_id)
        raise ValidationError({"signature": ["Invalid signature"]})

    if order_id:
        current_domain.process(
            RecordPayment(order_id=order_id, payment_reference=payment_id, gateway_order_id=gateway_order_id),
            asynchronous=False,
        )

    logger.info("payment_verified", gateway_order_id=gateway_order_id, payment_id=payment_id, order_id=order_id)
    return {"status": "success"}
