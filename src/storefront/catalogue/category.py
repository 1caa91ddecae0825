"""Category aggregate: the shop's two-level grouping (``Women`` → ``Sarees``)."""

from datetime import UTC, datetime

from protean.fields import DateTime, String

from storefront.catalogue.events import CategoryAdded, CategoryUpdated
from storefront.domain import storefront


@storefront.aggregate
class Category:
    name: String(required=True, max_length=100)
    parent: String(max_length=100)
    image_url: String(max_length=500)
    created_at: DateTime()

    @classmethod
    def create(cls, name, parent=None, image_url=None):
        category = cls(
            name=name.strip(),
            parent=parent or None,
            image_url=image_url,
            created_at=datetime.now(UTC),
        )
        category.raise_(CategoryAdded(category_id=str(category.id), name=category.name, parent=category.parent))
        return category

    def update_details(self, name=None, parent=None, image_url=None):
        if name is not None:
            self.name = name.strip()
        if parent is not None:
            self.parent = parent or None
        if image_url is not None:
            self.image_url = image_url

        self.raise_(CategoryUpdated(category_id=str(self.id), name=self.name, parent=self.parent))
