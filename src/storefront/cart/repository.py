from storefront.cart.cart import Cart
from storefront.domain import storefront


@storefront.repository(part_of=Cart)
class CartRepository:
    def for_owner(self, owner_id) -> Cart | None:
        carts = self._dao.query.filter(owner_id=str(owner_id)).all().items
        return carts[0] if carts else None

    def get_or_create(self, owner_id) -> Cart:
        return self.for_owner(owner_id) or Cart.create(owner_id=str(owner_id))
