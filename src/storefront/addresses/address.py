"""Saved delivery addresses and the rule that picks the one checkout starts from."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Identifier, String

from storefront.domain import storefront


@storefront.aggregate
class SavedAddress:
    """An address a customer kept for later checkouts."""

    owner_id: Identifier(required=True)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    address: String(required=True, max_length=500)
    city: String(required=True, max_length=100)
    pincode: String(required=True, max_length=10)
    state: String(max_length=100)
    is_default: Boolean(default=False)
    created_at: DateTime()

    @classmethod
    def create(cls, owner_id, address, city, pincode, first_name=None, last_name=None, state=None, is_default=False):
        return cls(
            owner_id=owner_id,
            first_name=first_name,
            last_name=last_name,
            address=(address or "").strip() or None,
            city=(city or "").strip() or None,
            pincode=(pincode or "").strip() or None,
            state=state,
            is_default=bool(is_default),
            created_at=datetime.now(UTC),
        )

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "first_name": self.first_name,
            "last_name": self.last_name,
            "address": self.address,
            "city": self.city,
            "pincode": self.pincode,
            "state": self.state,
            "is_default": self.is_default,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


def resolve_default(addresses):
    """The address flagged as default, else the most recently created, else ``None``."""
    if not addresses:
        return None
    flagged = next((a for a in addresses if a.is_default), None)
    if flagged is not None:
        return flagged
    return max(addresses, key=lambda a: a.created_at)


@storefront.repository(part_of=SavedAddress)
class SavedAddressRepository:
    def list_for(self, owner_id) -> list[SavedAddress]:
        """The owner's addresses, newest first."""
        addresses = self._dao.query.filter(owner_id=str(owner_id)).all().items
        return sorted(addresses, key=lambda a: a.created_at, reverse=True)
