"""Domain events for the catalogue aggregates."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A new product was listed in the catalogue."""

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)
    stock: Integer(required=True)
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)


@storefront.event(part_of="Product")
class StockWithdrawn:
    """Units left the shelf for an order."""

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    size: String()
    remaining: Integer(required=True)
    order_reference: String()


@storefront.event(part_of="Product")
class StockReplenished:
    """Units came back to the shelf."""

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    size: String()
    stock: Integer(required=True)
    reason: String()


@storefront.event(part_of="Product")
class StockAdjusted:
    """An admin set the stock count directly."""

    product_id: Identifier(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)


@storefront.event(part_of="Category")
class CategoryAdded:
    category_id: Identifier(required=True)
    name: String(required=True)
    parent: String()


@storefront.event(part_of="Category")
class CategoryUpdated:
    category_id: Identifier(required=True)
    name: String(required=True)
    parent: String()
