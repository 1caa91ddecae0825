"""Customer profiles: display name and role alongside the auth user."""

from datetime import UTC, datetime
from enum import Enum

from protean import handle
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront


class Role(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


@storefront.aggregate
class Profile:
    user_id: Identifier(required=True)
    full_name: String(max_length=255)
    role: String(choices=Role, default=Role.CUSTOMER.value)
    created_at: DateTime()


@storefront.repository(part_of=Profile)
class ProfileRepository:
    def for_user(self, user_id) -> Profile | None:
        profiles = self._dao.query.filter(user_id=str(user_id)).all().items
        return profiles[0] if profiles else None

    def names_by_user(self) -> dict[str, str]:
        return {str(p.user_id): p.full_name for p in self._dao.query.all().items if p.full_name}


@storefront.command(part_of="Profile")
class SaveProfile:
    user_id: Identifier(required=True)
    full_name: String(max_length=255)
    role: String(max_length=20)


@storefront.command(part_of="Profile")
class RemoveProfile:
    user_id: Identifier(required=True)


@storefront.command_handler(part_of=Profile)
class ProfileHandler:
    @handle(SaveProfile)
    def save_profile(self, command):
        repo = current_domain.repository_for(Profile)
        profile = repo.for_user(command.user_id)
        if profile is None:
            profile = Profile(
                user_id=command.user_id,
                full_name=command.full_name,
                role=command.role or Role.CUSTOMER.value,
                created_at=datetime.now(UTC),
            )
        else:
            if command.full_name is not None:
                profile.full_name = command.full_name
            if command.role:
                profile.role = command.role
        repo.add(profile)
        return str(profile.id)

    @handle(RemoveProfile)
    def remove_profile(self, command):
        repo = current_domain.repository_for(Profile)
        profile = repo.for_user(command.user_id)
        if profile is not None:
            repo._dao.delete(profile)
