"""Order placement: turn the customer's cart into a Pending order.

Everything happens in one unit of work: stock is withdrawn for every line,
the order is created and the cart is emptied. Every line is checked against
the shelf before anything is written, so a shortfall on any line leaves stock,
orders and cart untouched.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.order.order import Order, ShippingDetails
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    address = String(required=True, max_length=500)
    city = String(required=True, max_length=100)
    pincode = String(required=True, max_length=10)
    state = String(max_length=100)
    payment_method = String(max_length=50)
    idempotency_key = String(max_length=255)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order_repo = current_domain.repository_for(Order)

        existing = order_repo.find_by_idempotency_key(command.customer_id, command.idempotency_key)
        if existing is not None:
            logger.info(
                "order_placement_replayed",
                order_id=str(existing.id),
                customer_id=str(command.customer_id),
                idempotency_key=command.idempotency_key,
            )
            return str(existing.id)

        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.for_owner(command.customer_id)
        if cart is None or cart.is_empty:
            raise ValidationError({"cart": ["Your cart is empty"]})

        shipping = ShippingDetails(
            first_name=command.first_name,
            last_name=command.last_name,
            address=command.address,
            city=command.city,
            pincode=command.pincode,
            state=command.state,
        )
        lines = cart.lines()

        products = _load_products(lines)
        for line in lines:
            products[str(line.product_id)].withdraw(1, size=line.selected_size)

        order = Order.place(
            customer_id=command.customer_id,
            shipping=shipping,
            lines=[
                {
                    "product_id": str(line.product_id),
                    "name": line.name,
                    "category": line.category,
                    "price": line.price,
                    "selected_size": line.selected_size,
                }
                for line in lines
            ],
            payment_method=command.payment_method,
            idempotency_key=command.idempotency_key,
        )
        cart.clear()

        product_repo = current_domain.repository_for(Product)
        for product in products.values():
            product_repo.add(product)
            logger.info("stock_withdrawn", product_id=str(product.id), remaining=product.stock)
        order_repo.add(order)
        cart_repo.add(cart)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            item_count=len(lines),
            total=order.total,
        )
        return str(order.id)


def _load_products(lines) -> dict:
    repo = current_domain.repository_for(Product)
    products = {}
    for line in lines:
        key = str(line.product_id)
        if key in products:
            continue
        try:
            products[key] = repo.get(key)
        except ObjectNotFoundError:
            raise ValidationError({"stock": [f"{line.name} is no longer available"]}) from None
    return products
