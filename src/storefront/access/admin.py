"""Back-office administrators and their credentials."""

import hashlib
import hmac
import secrets
from datetime import UTC, datetime

from protean.fields import DateTime, String

from storefront.domain import storefront

PBKDF2_ITERATIONS = 260_000
MIN_PASSWORD_LENGTH = 6


def hash_password(password: str, salt: str | None = None, iterations: int = PBKDF2_ITERATIONS) -> str:
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations).hex()
    return f"pbkdf2_sha256${iterations}${salt}${digest}"


def verify_password(password: str, password_hash: str | None) -> bool:
    try:
        algorithm, iterations, salt, _ = (password_hash or "").split("$")
    except ValueError:
        return False
    if algorithm != "pbkdf2_sha256":
        return False
    return hmac.compare_digest(hash_password(password, salt, int(iterations)), password_hash)


@storefront.aggregate
class Admin:
    """Someone allowed into the back-office. ``username`` is their sign-in e-mail."""

    username: String(required=True, max_length=255)
    password_hash: String(required=True, max_length=255)
    created_at: DateTime()

    @classmethod
    def create(cls, username, password):
        return cls(
            username=username.strip(),
            password_hash=hash_password(password),
            created_at=datetime.now(UTC),
        )

    def check_password(self, password) -> bool:
        return verify_password(password, self.password_hash)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "username": self.username,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@storefront.repository(part_of=Admin)
class AdminRepository:
    def list_all(self) -> list[Admin]:
        return sorted(self._dao.query.all().items, key=lambda a: a.created_at)

    def find_by_username(self, username) -> Admin | None:
        if not username:
            return None
        admins = self._dao.query.filter(username=username.strip()).all().items
        return admins[0] if admins else None
