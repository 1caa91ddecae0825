"""Customer directory for the back-office.

Joins the identity provider's users with their profiles and order history.
"""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.access.profile import Profile, RemoveProfile, Role, SaveProfile
from storefront.auth import get_identity_provider
from storefront.auth.port import IdentityProviderError
from storefront.order.order import Order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def list_customers() -> list[dict]:
    users = get_identity_provider().list_users()
    names = current_domain.repository_for(Profile).names_by_user()

    stats: dict[str, dict] = {}
    for order in current_domain.repository_for(Order).list_all():
        entry = stats.setdefault(str(order.customer_id), {"count": 0, "spent": 0.0})
        entry["count"] += 1
        entry["spent"] += order.total or 0

    return [
        {
            "id": user.id,
            "email": user.email or "No email",
            "name": names.get(user.id) or "No name set",
            "created_at": user.created_at,
            "last_sign_in_at": user.last_sign_in_at,
            "orders": stats.get(user.id, {}).get("count", 0),
            "total_spent": round(stats.get(user.id, {}).get("spent", 0.0), 2),
        }
        for user in users
    ]


def create_customer(email, password, full_name=None, role=Role.CUSTOMER.value) -> dict:
    if not email or not password:
        raise ValidationError({"customer": ["Email and password are required"]})

    try:
        user = get_identity_provider().create_user(email, password, {"role": role, "full_name": full_name})
    except IdentityProviderError as exc:
        raise ValidationError({"email": [str(exc)]}) from exc

    current_domain.process(SaveProfile(user_id=user.id, full_name=full_name, role=role), asynchronous=False)
    logger.info("customer_created", user_id=user.id)
    return {"id": user.id, "email": user.email, "name": full_name or "No name set"}


def delete_customer(user_id) -> None:
    if not user_id:
        raise ValidationError({"id": ["Customer id is required"]})

    try:
        get_identity_provider().delete_user(user_id)
    except IdentityProviderError as exc:
        raise ValidationError({"id": [str(exc)]}) from exc

    current_domain.process(RemoveProfile(user_id=user_id), asynchronous=False)
    logger.info("customer_deleted", user_id=user_id)
