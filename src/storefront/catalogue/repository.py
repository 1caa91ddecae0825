"""Catalogue queries: browsing, search and the dashboard counts."""

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.repository(part_of=Product)
class ProductRepository:
    def list_all(self) -> list[Product]:
        return self._dao.query.all().items

    def count(self) -> int:
        return self._dao.query.all().total

    def browse(self, categories=None, search=None) -> list[Product]:
        """Products in any of ``categories`` whose name contains ``search``, newest first."""
        products = self.list_all()
        if categories:
            wanted = {name.lower() for name in categories}
            products = [p for p in products if (p.category or "").lower() in wanted]
        if search:
            needle = search.strip().lower()
            products = [p for p in products if needle in (p.name or "").lower()]
        return sorted(products, key=lambda p: p.created_at, reverse=True)

    def newest(self, limit: int = 5) -> list[Product]:
        return self.browse()[:limit]


@storefront.repository(part_of=Category)
class CategoryRepository:
    def list_by_name(self) -> list[Category]:
        return sorted(self._dao.query.all().items, key=lambda c: c.name.lower())

    def count(self) -> int:
        return self._dao.query.all().total

    def find_by_name(self, name: str) -> Category | None:
        wanted = name.strip().lower()
        return next((c for c in self._dao.query.all().items if c.name.lower() == wanted), None)

    def with_subcategories(self, name: str) -> list[str]:
        """The category's own name followed by its direct children."""
        wanted = name.strip().lower()
        children = [c.name for c in self._dao.query.all().items if (c.parent or "").lower() == wanted]
        return [name, *children]
