"""Dispatch slips: the label packed with each parcel.

Batches are built strictly one order at a time, and any failure (an unknown
order, a Delivered order) aborts the whole batch before a document exists.
"""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.dispatch.writer import get_writer
from storefront.order.order import Order
from storefront.shared.money import format_amount
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

STORE_NAME = "AISHWARYA COLLECTIONS"
SLIP_WIDTH = 48


class DispatchSlipTemplate:
    @staticmethod
    def render(order: Order) -> list[str]:
        shipping = order.shipping
        rule = "-" * SLIP_WIDTH
        return [
            STORE_NAME.center(SLIP_WIDTH),
            "DISPATCH SLIP".center(SLIP_WIDTH),
            rule,
            "CUSTOMER NAME",
            f"  {shipping.customer_name}",
            "DELIVERY ADDRESS",
            f"  {shipping.address}",
            f"  {shipping.city} - {shipping.pincode}",
            rule,
            f"ORDER ID        {order.id}",
            f"PAYMENT METHOD  {(order.payment_method or '').upper()}",
            f"ORDER TOTAL     Rs. {format_amount(order.total)}",
            rule,
        ]


def render_slip(order: Order) -> list[str]:
    """One slip page for ``order``; Delivered orders have nothing left to dispatch."""
    if order.is_delivered:
        raise ValidationError({"order": [f"Order {order.id} is already delivered; no dispatch slip"]})
    return DispatchSlipTemplate.render(order)


def build_slips(order_ids) -> bytes:
    """A single multi-page document with one slip per order, in the order given."""
    if not order_ids:
        raise ValidationError({"order_ids": ["At least one order is required"]})

    repo = current_domain.repository_for(Order)
    pages = []
    for order_id in order_ids:
        pages.append(render_slip(repo.get(order_id)))

    logger.info("dispatch_slips_built", order_count=len(pages))
    return get_writer().render(f"{STORE_NAME} - DISPATCH SLIPS", pages)


def slip_for(order_id) -> bytes:
    return build_slips([order_id])
