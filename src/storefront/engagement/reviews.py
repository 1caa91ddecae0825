"""Product reviews from customers whose order was delivered.

One review per (order, product), and only for a product that was part of the
reviewer's own Delivered order.
"""

from datetime import UTC, datetime

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus


@storefront.aggregate
class ProductReview:
    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text()
    image_url = String(max_length=500)
    created_at = DateTime()

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "order_id": str(self.order_id),
            "product_id": str(self.product_id),
            "user_id": str(self.user_id),
            "rating": self.rating,
            "comment": self.comment,
            "image_url": self.image_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@storefront.repository(part_of=ProductReview)
class ProductReviewRepository:
    def for_product(self, product_id) -> list[ProductReview]:
        reviews = self._dao.query.filter(product_id=str(product_id)).all().items
        return sorted(reviews, key=lambda r: r.created_at, reverse=True)

    def exists_for(self, order_id, product_id) -> bool:
        return bool(self._dao.query.filter(order_id=str(order_id), product_id=str(product_id)).all().items)


@storefront.command(part_of="ProductReview")
class SubmitReview:
    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text()
    image_url = String(max_length=500)


@storefront.command_handler(part_of=ProductReview)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        if not 1 <= command.rating <= 5:
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})

        order = current_domain.repository_for(Order).get(command.order_id)
        if str(order.customer_id) != str(command.user_id):
            raise ValidationError({"order_id": ["You can only review your own orders"]})
        if order.status != OrderStatus.DELIVERED.value:
            raise ValidationError({"order_id": ["Reviews open once the order is delivered"]})
        if not any(str(item.product_id) == str(command.product_id) for item in order.items):
            raise ValidationError({"product_id": ["This product is not part of the order"]})

        repo = current_domain.repository_for(ProductReview)
        if repo.exists_for(command.order_id, command.product_id):
            raise ValidationError({"review": ["You have already reviewed this product for this order"]})

        review = ProductReview(
            order_id=command.order_id,
            product_id=command.product_id,
            user_id=command.user_id,
            rating=command.rating,
            comment=command.comment,
            image_url=command.image_url,
            created_at=datetime.now(UTC),
        )
        repo.add(review)
        return str(review.id)
