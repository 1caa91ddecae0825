"""Cart aggregate: the customer's bag, one per signed-in owner.

Each line snapshots the product as it was listed when added, price included,
as the text shown on the card (``"1,200"``). Lines are never merged, so adding
the same saree twice gives two lines. Stock is not checked until checkout.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved
from storefront.domain import storefront
from storefront.shared.money import total_of


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    category = String(max_length=100)
    price = String(required=True, max_length=50)
    image_url = String(max_length=500)
    selected_size = String(max_length=20)
    position = Integer(required=True, min_value=0)


@storefront.aggregate
class Cart:
    owner_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, owner_id):
        now = datetime.now(UTC)
        return cls(owner_id=owner_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def lines(self) -> list[CartItem]:
        """Cart lines in the order they were added."""
        return sorted(self.items or [], key=lambda item: item.position)

    @property
    def total(self) -> float:
        return total_of(item.price for item in self.lines())

    @property
    def is_empty(self) -> bool:
        return not self.items

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, name, price, category=None, image_url=None, selected_size=None):
        lines = self.lines()
        position = lines[-1].position + 1 if lines else 0

        item = CartItem(
            product_id=product_id,
            name=name,
            category=category,
            price=str(price),
            image_url=image_url,
            selected_size=selected_size or None,
            position=position,
        )
        self.add_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                owner_id=str(self.owner_id),
                product_id=str(product_id),
                price=item.price,
                selected_size=item.selected_size,
            )
        )
        return item

    def remove_item(self, index):
        """Remove the line at ``index`` (0-based, in display order)."""
        lines = self.lines()
        if index is None or index < 0 or index >= len(lines):
            raise ValidationError({"index": [f"No cart line at position {index}"]})

        item = lines[index]
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                owner_id=str(self.owner_id),
                product_id=str(item.product_id),
                index=index,
            )
        )

    def clear(self):
        lines = self.lines()
        for item in lines:
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id), owner_id=str(self.owner_id), item_count=len(lines)))
