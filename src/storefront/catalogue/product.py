"""Product aggregate: the garments on sale and their stock on hand.

Stock is kept as a single count with an optional per-size breakdown
(``{"S": 2, "M": 0}``). Checkout withdraws stock with a conditional rule,
"take N only while N are on hand", so stock never goes below zero.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from storefront.catalogue.events import (
    ProductAdded,
    ProductDetailsUpdated,
    StockAdjusted,
    StockReplenished,
    StockWithdrawn,
)
from storefront.domain import storefront
from storefront.shared.money import format_amount

LOW_STOCK_THRESHOLD = 5


def stock_badge(stock) -> str:
    """Availability label shown on the product page."""
    stock = stock or 0
    if stock <= 0:
        return "Out of Stock"
    if stock <= LOW_STOCK_THRESHOLD:
        return f"Only {stock} pieces left"
    return f"In Stock ({stock} available)"


def parse_sizes(sizes) -> dict:
    """Load a size map from JSON text or a dict; empty input gives ``{}``."""
    if not sizes:
        return {}
    if isinstance(sizes, dict):
        return dict(sizes)
    try:
        loaded = json.loads(sizes)
    except (json.JSONDecodeError, TypeError):
        raise ValidationError({"sizes": ["Sizes must be valid JSON"]}) from None
    if not isinstance(loaded, dict):
        raise ValidationError({"sizes": ["Sizes must be a JSON object of size to quantity"]})
    return loaded


@storefront.aggregate
class Product:
    name: String(required=True, max_length=255)
    category: String(required=True, max_length=100)
    price: Float(required=True, min_value=0.0)
    discount_price: Float(min_value=0.0)
    stock: Integer(default=0, min_value=0)
    sizes: Text()
    image_url: String(max_length=500)
    description: Text()
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def size_quantities_must_be_valid(self):
        for size, quantity in parse_sizes(self.sizes).items():
            if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 0:
                raise ValidationError({"sizes": [f"Quantity for size '{size}' must be a non-negative integer"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        name,
        category,
        price,
        stock=0,
        discount_price=None,
        sizes=None,
        image_url=None,
        description=None,
    ):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            category=category,
            price=price,
            discount_price=discount_price,
            stock=stock,
            sizes=json.dumps(parse_sizes(sizes)) if sizes else None,
            image_url=image_url,
            description=description,
            created_at=now,
            updated_at=now,
        )

        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                category=product.category,
                price=product.price,
                stock=product.stock,
                created_at=now,
            )
        )

        return product

    # -------------------------------------------------------------------
    # Details
    # -------------------------------------------------------------------
    def update_details(self, **changes):
        """Update the listed details. ``None`` values are left untouched."""
        allowed = ("name", "category", "price", "discount_price", "image_url", "description")
        for field_name in allowed:
            value = changes.get(field_name)
            if value is not None:
                setattr(self, field_name, value)

        if changes.get("sizes") is not None:
            self.sizes = json.dumps(parse_sizes(changes["sizes"]))

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                name=self.name,
                category=self.category,
                price=self.price,
            )
        )

    @property
    def listed_price(self) -> str:
        """Price as shown on the product card, discount applied when lower."""
        if self.discount_price and self.discount_price < self.price:
            return format_amount(self.discount_price)
        return format_amount(self.price)

    def size_quantities(self) -> dict:
        return parse_sizes(self.sizes)

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def can_withdraw(self, quantity=1, size=None) -> bool:
        if (self.stock or 0) < quantity:
            return False
        sizes = self.size_quantities()
        if size and size in sizes and sizes[size] < quantity:
            return False
        return True

    def withdraw(self, quantity=1, size=None, order_reference=None):
        """Take ``quantity`` units off the shelf, failing when fewer are on hand."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        available = self.stock or 0
        if available < quantity:
            raise ValidationError(
                {"stock": [f"{self.name} is out of stock: {available} available, {quantity} requested"]}
            )

        sizes = self.size_quantities()
        if size and size in sizes:
            if sizes[size] < quantity:
                raise ValidationError(
                    {"stock": [f"{self.name} is out of stock in size {size}: {sizes[size]} available"]}
                )
            sizes[size] -= quantity
            self.sizes = json.dumps(sizes)

        self.stock = available - quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockWithdrawn(
                product_id=str(self.id),
                quantity=quantity,
                size=size,
                remaining=self.stock,
                order_reference=order_reference,
            )
        )

    def replenish(self, quantity=1, size=None, reason=None):
        """Return units to stock, e.g. when an order is cancelled."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        sizes = self.size_quantities()
        if size and size in sizes:
            sizes[size] += quantity
            self.sizes = json.dumps(sizes)

        self.stock = (self.stock or 0) + quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockReplenished(
                product_id=str(self.id),
                quantity=quantity,
                size=size,
                stock=self.stock,
                reason=reason,
            )
        )

    def adjust_stock(self, new_stock):
        """Set the stock count from the back-office; negative counts clamp to zero."""
        previous = self.stock or 0
        self.stock = max(0, int(new_stock))
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockAdjusted(
                product_id=str(self.id),
                previous_stock=previous,
                new_stock=self.stock,
            )
        )
