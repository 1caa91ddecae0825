"""Who is calling, and whether they may use the back-office.

Role precedence: an ``Admin`` whose username is the user's e-mail, then the
user's profile role, then the role in the auth user's metadata, then
``customer``.
"""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from storefront.access.admin import Admin
from storefront.access.profile import Profile, Role
from storefront.auth import get_identity_provider
from storefront.auth.port import AuthUser


@dataclass(frozen=True)
class CurrentUser:
    id: str
    email: str | None
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def resolve_role(user: AuthUser) -> str:
    if current_domain.repository_for(Admin).find_by_username(user.email) is not None:
        return Role.ADMIN.value

    profile = current_domain.repository_for(Profile).for_user(user.id)
    if profile is not None and profile.role:
        return profile.role

    return user.metadata_role or Role.CUSTOMER.value


def current_user(access_token: str | None) -> CurrentUser | None:
    """The signed-in user for a bearer token, or ``None``."""
    if not access_token:
        return None
    user = get_identity_provider().get_user(access_token)
    if user is None:
        return None
    return CurrentUser(id=user.id, email=user.email, role=resolve_role(user))
