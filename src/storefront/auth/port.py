"""Identity provider port (abstract interface).

The hosted auth service owns sign-in, sessions and the auth user directory.
The shop only verifies bearer tokens and, from the back-office, lists,
creates and removes auth users.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class IdentityProviderError(Exception):
    """The identity provider rejected a request."""


@dataclass(frozen=True)
class AuthUser:
    """A user as the identity provider knows them."""

    id: str
    email: str | None = None
    created_at: str | None = None
    last_sign_in_at: str | None = None
    user_metadata: dict = field(default_factory=dict)

    @property
    def metadata_role(self) -> str | None:
        return (self.user_metadata or {}).get("role")


class IdentityProvider(ABC):
    """Abstract identity provider interface."""

    @abstractmethod
    def get_user(self, access_token: str) -> AuthUser | None:
        """The user a bearer token belongs to, or ``None`` for a bad token."""
        ...

    @abstractmethod
    def list_users(self) -> list[AuthUser]:
        ...

    @abstractmethod
    def create_user(self, email: str, password: str, user_metadata: dict | None = None) -> AuthUser:
        ...

    @abstractmethod
    def delete_user(self, user_id: str) -> None:
        ...
