"""Wishlist: products a customer hearted, one entry per product."""

from datetime import UTC, datetime

from protean import handle
from protean.fields import DateTime, Identifier
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.aggregate
class WishlistEntry:
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)
    added_at = DateTime()


@storefront.repository(part_of=WishlistEntry)
class WishlistRepository:
    def for_owner(self, owner_id) -> list[WishlistEntry]:
        entries = self._dao.query.filter(owner_id=str(owner_id)).all().items
        return sorted(entries, key=lambda e: e.added_at, reverse=True)

    def find(self, owner_id, product_id) -> WishlistEntry | None:
        entries = self._dao.query.filter(owner_id=str(owner_id), product_id=str(product_id)).all().items
        return entries[0] if entries else None


@storefront.command(part_of="WishlistEntry")
class ToggleWishlist:
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=WishlistEntry)
class WishlistHandler:
    @handle(ToggleWishlist)
    def toggle(self, command):
        """Add the product when absent, remove it when present. Returns whether it is now listed."""
        repo = current_domain.repository_for(WishlistEntry)
        existing = repo.find(command.owner_id, command.product_id)
        if existing is not None:
            repo._dao.delete(existing)
            return False

        current_domain.repository_for(Product).get(command.product_id)
        repo.add(
            WishlistEntry(
                owner_id=command.owner_id,
                product_id=command.product_id,
                added_at=datetime.now(UTC),
            )
        )
        return True
