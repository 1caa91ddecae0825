"""Identity provider factory.

Provides get_identity_provider() / set_identity_provider() to swap implementations:
- SupabaseIdentityProvider when SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY are set
- FakeIdentityProvider for development and testing
"""

import os

from storefront.auth.fake_adapter import FakeIdentityProvider
from storefront.auth.port import IdentityProvider

_current_provider: IdentityProvider | None = None


def get_identity_provider() -> IdentityProvider:
    global _current_provider
    if _current_provider is None:
        url = os.getenv("SUPABASE_URL")
        key = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
        if url and key:
            from storefront.auth.supabase_adapter import SupabaseIdentityProvider

            _current_provider = SupabaseIdentityProvider(url=url, service_role_key=key)
        else:
            _current_provider = FakeIdentityProvider()
    return _current_provider


def set_identity_provider(provider: IdentityProvider) -> None:
    """Override the active identity provider (useful for tests)."""
    global _current_provider
    _current_provider = provider


def reset_identity_provider() -> None:
    global _current_provider
    _current_provider = None
