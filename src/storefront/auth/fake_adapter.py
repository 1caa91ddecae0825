"""In-memory identity provider for development and testing."""

from datetime import UTC, datetime
from uuid import uuid4

from storefront.auth.port import AuthUser, IdentityProvider, IdentityProviderError


class FakeIdentityProvider(IdentityProvider):
    """Identity provider that keeps users and tokens in memory."""

    def __init__(self) -> None:
        self.users: dict[str, AuthUser] = {}
        self.passwords: dict[str, str] = {}
        self.tokens: dict[str, str] = {}
        self.calls: list[dict] = []

    def issue_token(self, user_id: str) -> str:
        """Hand out a bearer token for ``user_id``, as a sign-in would."""
        token = f"fake-token-{uuid4().hex}"
        self.tokens[token] = user_id
        return token

    def register(self, email: str, password: str = "secret123", role: str | None = None) -> tuple[AuthUser, str]:
        """Create a user and sign them in; returns the user and a token."""
        user = self.create_user(email, password, {"role": role} if role else None)
        return user, self.issue_token(user.id)

    def get_user(self, access_token: str) -> AuthUser | None:
        user_id = self.tokens.get(access_token)
        return self.users.get(user_id) if user_id else None

    def list_users(self) -> list[AuthUser]:
        self.calls.append({"method": "list_users"})
        return list(self.users.values())

    def create_user(self, email: str, password: str, user_metadata: dict | None = None) -> AuthUser:
        self.calls.append({"method": "create_user", "email": email})
        if any(u.email == email for u in self.users.values()):
            raise IdentityProviderError("A user with this email address has already been registered")

        user = AuthUser(
            id=str(uuid4()),
            email=email,
            created_at=datetime.now(UTC).isoformat(),
            user_metadata=dict(user_metadata or {}),
        )
        self.users[user.id] = user
        self.passwords[user.id] = password
        return user

    def delete_user(self, user_id: str) -> None:
        self.calls.append({"method": "delete_user", "user_id": user_id})
        if user_id not in self.users:
            raise IdentityProviderError("User not found")
        del self.users[user_id]
        self.passwords.pop(user_id, None)
        self.tokens = {token: uid for token, uid in self.tokens.items() if uid != user_id}
