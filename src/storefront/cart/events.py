"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    cart_id: Identifier(required=True)
    owner_id: Identifier(required=True)
    product_id: Identifier(required=True)
    price: String(required=True)
    selected_size: String()


@storefront.event(part_of="Cart")
class CartItemRemoved:
    cart_id: Identifier(required=True)
    owner_id: Identifier(required=True)
    product_id: Identifier(required=True)
    index: Integer(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    cart_id: Identifier(required=True)
    owner_id: Identifier(required=True)
    item_count: Integer(required=True)
