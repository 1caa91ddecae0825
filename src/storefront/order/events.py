"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A customer checked out their cart."""

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    payment_method = String(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """The back-office moved an order along its lifecycle."""

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    previous_status = String(required=True)
    cancelled_at = DateTime(required=True)


@storefront.event(part_of="Order")
class PaymentRecorded:
    """The gateway confirmed payment for an order."""

    order_id = Identifier(required=True)
    payment_reference = String(required=True)
    amount = Float(required=True)
    recorded_at = DateTime(required=True)
