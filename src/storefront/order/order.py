"""Order aggregate: a placed checkout and its trip from the shop to the door.

State Machine:
    Pending → Preparing → Shipped → Delivered
    Cancelled (from Pending, Preparing, Shipped)
Delivered and Cancelled are terminal.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged, PaymentRecorded
from storefront.shared.money import parse_amount, total_of


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "Pending"
    PREPARING = "Preparing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class PaymentStatus(Enum):
    PENDING = "Pending"
    PAID = "Paid"


class PaymentMethod(Enum):
    UPI = "upi"
    CARD = "card"
    COD = "cod"
    RAZORPAY = "razorpay"


DEFAULT_PAYMENT_METHOD = PaymentMethod.UPI.value

# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PREPARING, OrderStatus.CANCELLED},
    OrderStatus.PREPARING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# Progress bar on the customer's order page
_TRACKING_STEPS = {
    OrderStatus.PENDING.value: 1,
    OrderStatus.PREPARING.value: 2,
    OrderStatus.SHIPPED.value: 3,
    OrderStatus.DELIVERED.value: 4,
}


def tracking_step(status) -> int:
    return _TRACKING_STEPS.get(status, 1)


def can_transition(current, target) -> bool:
    try:
        return OrderStatus(target) in _VALID_TRANSITIONS.get(OrderStatus(current), set())
    except ValueError:
        return False


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingDetails:
    """Who the parcel goes to and where, captured at checkout.

    Later edits to the customer's saved addresses never touch a placed order.
    """

    first_name = String(max_length=100)
    last_name = String(max_length=100)
    address = String(required=True, max_length=500)
    city = String(required=True, max_length=100)
    pincode = String(required=True, max_length=10)
    state = String(max_length=100)

    @invariant.post
    def delivery_fields_must_not_be_blank(self):
        blank = [name for name in ("address", "city", "pincode") if not (getattr(self, name) or "").strip()]
        if blank:
            raise ValidationError({name: ["is required"] for name in blank})

    @property
    def customer_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part) or "Customer"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """One cart line as it was bought."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    category = String(max_length=100)
    quantity = Integer(default=1, min_value=1)
    price = Float(required=True, min_value=0.0)
    selected_size = String(max_length=20)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    customer_id = Identifier(required=True)
    shipping = ValueObject(ShippingDetails, required=True)
    items = HasMany(OrderItem)
    total = Float(default=0.0, min_value=0.0)
    payment_method = String(max_length=50, default=DEFAULT_PAYMENT_METHOD)
    gateway_order_id = String(max_length=255)
    payment_reference = String(max_length=255)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    idempotency_key = String(max_length=255)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, shipping, lines, payment_method=None, idempotency_key=None):
        """Create a Pending order from cart lines.

        Args:
            customer_id: The signed-in customer.
            shipping: A ``ShippingDetails`` value object.
            lines: Dicts with product_id, name, category, price (as listed)
                and selected_size, one per cart line.
        """
        if not lines:
            raise ValidationError({"cart": ["Your cart is empty"]})

        now = datetime.now(UTC)
        order = cls(
            customer_id=customer_id,
            shipping=shipping,
            total=total_of(line["price"] for line in lines),
            payment_method=payment_method or DEFAULT_PAYMENT_METHOD,
            payment_status=PaymentStatus.PENDING.value,
            status=OrderStatus.PENDING.value,
            idempotency_key=idempotency_key,
            created_at=now,
            updated_at=now,
        )

        for line in lines:
            order.add_items(
                OrderItem(
                    product_id=line["product_id"],
                    product_name=line["name"],
                    category=line.get("category"),
                    quantity=1,
                    price=parse_amount(line["price"]),
                    selected_size=line.get("selected_size"),
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                item_count=len(lines),
                total=order.total,
                payment_method=order.payment_method,
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def change_status(self, new_status):
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {new_status}"]}) from None

        self._assert_can_transition(target)

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        if target == OrderStatus.CANCELLED:
            self.raise_(
                OrderCancelled(
                    order_id=str(self.id),
                    customer_id=str(self.customer_id),
                    previous_status=previous,
                    cancelled_at=now,
                )
            )
        else:
            self.raise_(
                OrderStatusChanged(
                    order_id=str(self.id),
                    customer_id=str(self.customer_id),
                    previous_status=previous,
                    new_status=target.value,
                    changed_at=now,
                )
            )

    @property
    def tracking_step(self) -> int:
        return tracking_step(self.status)

    @property
    def is_delivered(self) -> bool:
        return self.status == OrderStatus.DELIVERED.value

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def attach_gateway_order(self, gateway_order_id, amount_in_paise):
        """Bind the gateway order the customer will pay through; it must charge the order total."""
        if self.payment_status == PaymentStatus.PAID.value:
            raise ValidationError({"payment": ["Order has already been paid"]})
        if self.status == OrderStatus.CANCELLED.value:
            raise ValidationError({"payment": ["Cannot pay for a cancelled order"]})
        if amount_in_paise != int(round((self.total or 0) * 100)):
            raise ValidationError({"amount": [f"Amount does not match the order total of {self.total:.2f}"]})

        self.gateway_order_id = gateway_order_id
        self.updated_at = datetime.now(UTC)

    def record_payment(self, payment_reference, gateway_order_id):
        if self.payment_status == PaymentStatus.PAID.value:
            if self.payment_reference == payment_reference:
                return
            raise ValidationError({"payment": ["Order has already been paid"]})
        if self.status == OrderStatus.CANCELLED.value:
            raise ValidationError({"payment": ["Cannot record payment on a cancelled order"]})
        if not self.gateway_order_id or self.gateway_order_id != gateway_order_id:
            raise ValidationError({"payment": ["Payment does not belong to this order"]})

        now = datetime.now(UTC)
        self.payment_reference = payment_reference
        self.payment_status = PaymentStatus.PAID.value
        self.updated_at = now

        self.raise_(
            PaymentRecorded(
                order_id=str(self.id),
                payment_reference=payment_reference,
                amount=self.total,
                recorded_at=now,
            )
        )

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "customer_id": str(self.customer_id),
            "status": self.status,
            "tracking_step": self.tracking_step,
            "total": self.total,
            "payment_method": self.payment_method,
            "payment_status": self.payment_status,
            "payment_reference": self.payment_reference,
            "gateway_order_id": self.gateway_order_id,
            "shipping": {
                "first_name": self.shipping.first_name,
                "last_name": self.shipping.last_name,
                "address": self.shipping.address,
                "city": self.shipping.city,
                "pincode": self.shipping.pincode,
                "state": self.shipping.state,
            },
            "items": [
                {
                    "product_id": str(item.product_id),
                    "product_name": item.product_name,
                    "category": item.category,
                    "quantity": item.quantity,
                    "price": item.price,
                    "selected_size": item.selected_size,
                }
                for item in self.items
            ],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
