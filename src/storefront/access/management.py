"""Admin management: commands and handler, plus the back-office credential check."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.access.admin import MIN_PASSWORD_LENGTH, Admin
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Admin")
class AddAdmin:
    username: String(max_length=255)
    password: String(max_length=255)


@storefront.command(part_of="Admin")
class RemoveAdmin:
    admin_id: Identifier(required=True)


@storefront.command_handler(part_of=Admin)
class ManageAdminHandler:
    @handle(AddAdmin)
    def add_admin(self, command):
        username = (command.username or "").strip()
        password = command.password or ""
        if not username or not password.strip():
            raise ValidationError({"admin": ["Username and password are required."]})
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters."]})

        repo = current_domain.repository_for(Admin)
        if repo.find_by_username(username) is not None:
            raise ValidationError({"username": ["An admin with that username already exists."]})

        admin = Admin.create(username=username, password=password)
        repo.add(admin)
        logger.info("admin_added", admin_id=str(admin.id), username=username)
        return str(admin.id)

    @handle(RemoveAdmin)
    def remove_admin(self, command):
        repo = current_domain.repository_for(Admin)
        admin = repo.get(command.admin_id)
        repo._dao.delete(admin)
        logger.info("admin_removed", admin_id=str(command.admin_id))


def check_admin_credentials(username, password) -> bool:
    admin = current_domain.repository_for(Admin).find_by_username(username)
    return admin is not None and admin.check_password(password or "")
