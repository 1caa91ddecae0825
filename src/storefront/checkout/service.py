"""Checkout application service.

Validates the cart, optionally keeps a newly typed address, and runs
``PlaceOrder`` while holding the stock locks of every product in the cart.
"""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.addresses.book import SaveAddress
from storefront.cart.cart import Cart
from storefront.checkout.locks import process_holding_stock
from storefront.checkout.placement import PlaceOrder
from storefront.order.order import Order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def place_order(customer_id, shipping: dict, payment_method=None, idempotency_key=None, save_address=False) -> str:
    """Place an order from the customer's cart and return the order id.

    ``shipping`` carries first_name, last_name, address, city, pincode and
    state. With ``save_address`` the address is added to the customer's
    address book first; a failure there is logged and checkout goes on.
    """
    existing = current_domain.repository_for(Order).find_by_idempotency_key(customer_id, idempotency_key)
    if existing is not None:
        return str(existing.id)

    cart = current_domain.repository_for(Cart).for_owner(customer_id)
    if cart is None or cart.is_empty:
        raise ValidationError({"cart": ["Your cart is empty"]})

    if save_address:
        _save_address(customer_id, shipping)

    product_ids = [line.product_id for line in cart.lines()]
    return process_holding_stock(
        PlaceOrder(
            customer_id=customer_id,
            first_name=shipping.get("first_name"),
            last_name=shipping.get("last_name"),
            address=shipping.get("address"),
            city=shipping.get("city"),
            pincode=shipping.get("pincode"),
            state=shipping.get("state"),
            payment_method=payment_method,
            idempotency_key=idempotency_key,
        ),
        product_ids,
    )


def _save_address(customer_id, shipping: dict) -> None:
    try:
        current_domain.process(
            SaveAddress(
                owner_id=customer_id,
                first_name=shipping.get("first_name"),
                last_name=shipping.get("last_name"),
                address=shipping.get("address"),
                city=shipping.get("city"),
                pincode=shipping.get("pincode"),
                state=shipping.get("state"),
            ),
            asynchronous=False,
        )
    except Exception as exc:
        logger.warning("address_save_failed", customer_id=str(customer_id), error=str(exc))
