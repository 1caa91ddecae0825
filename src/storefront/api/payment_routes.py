"""Razorpay checkout endpoint.

Mirrors the hosted checkout contract: one POST with an ``action`` of
``create-order`` or ``verify-payment``.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from storefront.api.deps import CurrentUser, get_current_user
from storefront.api.schemas import RazorpayRequest
from storefront.payments.checkout import CREATE_ORDER, VERIFY_PAYMENT, create_gateway_order, verify_payment
from storefront.payments.gateway import get_gateway
from storefront.payments.gateway.port import GatewayConfigurationError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("/razorpay")
async def razorpay_checkout(body: RazorpayRequest, user: CurrentUser = Depends(get_current_user)):
    try:
        get_gateway()
    except GatewayConfigurationError as exc:
        logger.error("razorpay_keys_missing")
        return JSONResponse(status_code=500, content={"error": exc.message})

    if body.action == CREATE_ORDER:
        return create_gateway_order(
            body.amount, currency=body.currency, receipt=body.receipt, order_id=body.order_id, customer_id=user.id
        )

    if body.action == VERIFY_PAYMENT:
        details = body.paymentDetails
        return verify_payment(
            gateway_order_id=details.razorpay_order_id if details else None,
            payment_id=details.razorpay_payment_id if details else None,
            signature=details.razorpay_signature if details else None,
            order_id=body.order_id,
            customer_id=user.id,
        )

    return JSONResponse(status_code=400, content={"error": "Invalid action"})
