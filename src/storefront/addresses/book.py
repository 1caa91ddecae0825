"""Address book: saving addresses and the checkout address view."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from storefront.addresses.address import SavedAddress, resolve_default
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="SavedAddress")
class SaveAddress:
    owner_id = Identifier(required=True)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    address = String(required=True, max_length=500)
    city = String(required=True, max_length=100)
    pincode = String(required=True, max_length=10)
    state = String(max_length=100)
    is_default = Boolean(default=False)


@storefront.command_handler(part_of=SavedAddress)
class AddressBookHandler:
    @handle(SaveAddress)
    def save_address(self, command):
        repo = current_domain.repository_for(SavedAddress)

        if command.is_default:
            for other in repo.list_for(command.owner_id):
                if other.is_default:
                    other.is_default = False
                    repo.add(other)

        saved = SavedAddress.create(
            owner_id=command.owner_id,
            first_name=command.first_name,
            last_name=command.last_name,
            address=command.address,
            city=command.city,
            pincode=command.pincode,
            state=command.state,
            is_default=command.is_default,
        )
        repo.add(saved)
        return str(saved.id)


def address_book(owner_id) -> dict:
    """Saved addresses plus the one checkout should preselect.

    ``mode`` is ``"select"`` when an address was resolved and ``"new"`` when
    the customer has to type one in. A failed lookup degrades to ``"new"``.
    """
    try:
        addresses = current_domain.repository_for(SavedAddress).list_for(owner_id)
    except Exception as exc:
        logger.error("address_lookup_failed", owner_id=str(owner_id), error=str(exc))
        return {"addresses": [], "selected_address_id": None, "mode": "new"}

    selected = resolve_default(addresses)
    return {
        "addresses": [a.to_dict() for a in addresses],
        "selected_address_id": str(selected.id) if selected else None,
        "mode": "select" if selected else "new",
    }
