"""Supabase Auth adapter over its REST API (GoTrue)."""

import httpx

from storefront.auth.port import AuthUser, IdentityProvider, IdentityProviderError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _to_user(data: dict) -> AuthUser:
    return AuthUser(
        id=data["id"],
        email=data.get("email"),
        created_at=data.get("created_at"),
        last_sign_in_at=data.get("last_sign_in_at"),
        user_metadata=data.get("user_metadata") or {},
    )


class SupabaseIdentityProvider(IdentityProvider):
    """Production adapter using the project's service-role key."""

    def __init__(self, url: str, service_role_key: str, timeout: float = 10.0) -> None:
        self.base_url = f"{url.rstrip('/')}/auth/v1"
        self.service_role_key = service_role_key
        self.timeout = timeout

    def _headers(self, bearer: str | None = None) -> dict:
        return {
            "apikey": self.service_role_key,
            "Authorization": f"Bearer {bearer or self.service_role_key}",
        }

    def _raise_for_error(self, response: httpx.Response) -> None:
        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = body.get("msg") or body.get("message") or body.get("error") or "Identity provider error"
            logger.error("identity_provider_error", status_code=response.status_code, message=message)
            raise IdentityProviderError(message)

    def get_user(self, access_token: str) -> AuthUser | None:
        response = httpx.get(f"{self.base_url}/user", headers=self._headers(access_token), timeout=self.timeout)
        if response.status_code != 200:
            return None
        return _to_user(response.json())

    def list_users(self) -> list[AuthUser]:
        response = httpx.get(
            f"{self.base_url}/admin/users",
            params={"page": 1, "per_page": 1000},
            headers=self._headers(),
            timeout=self.timeout,
        )
        self._raise_for_error(response)
        return [_to_user(item) for item in response.json().get("users", [])]

    def create_user(self, email: str, password: str, user_metadata: dict | None = None) -> AuthUser:
        response = httpx.post(
            f"{self.base_url}/admin/users",
            json={
                "email": email,
                "password": password,
                "email_confirm": True,
                "user_metadata": user_metadata or {},
            },
            headers=self._headers(),
            timeout=self.timeout,
        )
        self._raise_for_error(response)
        return _to_user(response.json())

    def delete_user(self, user_id: str) -> None:
        response = httpx.delete(f"{self.base_url}/admin/users/{user_id}", headers=self._headers(), timeout=self.timeout)
        self._raise_for_error(response)
