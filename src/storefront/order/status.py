"""Order status workflow: back-office status changes.

Cancelling returns each line's unit to the shelf in the same unit of work.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.checkout.locks import process_holding_stock
from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    changed_by = String(max_length=255)


@storefront.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous = order.status

        order.change_status(command.status)

        if order.status == OrderStatus.CANCELLED.value:
            _restock(order)

        repo.add(order)
        logger.info(
            "order_status_changed",
            order_id=str(order.id),
            previous_status=previous,
            new_status=order.status,
            changed_by=command.changed_by,
        )
        return order.status


def _restock(order):
    product_repo = current_domain.repository_for(Product)
    products = {}
    for item in order.items:
        key = str(item.product_id)
        if key not in products:
            try:
                products[key] = product_repo.get(key)
            except ObjectNotFoundError:
                logger.warning("restock_skipped_missing_product", order_id=str(order.id), product_id=key)
                products[key] = None
        product = products[key]
        if product is not None:
            product.replenish(item.quantity, size=item.selected_size, reason=f"Order {order.id} cancelled")

    for product in products.values():
        if product is not None:
            product_repo.add(product)


def change_order_status(order_id, status, changed_by=None) -> str:
    """Run ``UpdateOrderStatus`` holding the stock locks of the order's products.

    A cancellation writes restocked products back, so it has to serialize with
    checkouts and back-office edits of the same products.
    """
    order = current_domain.repository_for(Order).get(order_id)
    product_ids = [item.product_id for item in order.items]
    return process_holding_stock(
        UpdateOrderStatus(order_id=order_id, status=status, changed_by=changed_by),
        product_ids,
    )
