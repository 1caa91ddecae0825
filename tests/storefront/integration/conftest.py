import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers
from protean.utils.globals import current_domain
from storefront.access.management import AddAdmin
from storefront.api import ALL_ROUTERS


@pytest.fixture()
def client(storefront_bed):
    app = FastAPI()
    register_exception_handlers(app)

    @app.middleware("http")
    async def domain_context_middleware(request, call_next):
        with storefront_bed.domain.domain_context():
            return await call_next(request)

    for router in ALL_ROUTERS:
        app.include_router(router)
    return TestClient(app)


@pytest.fixture()
def customer(identity_provider):
    """A signed-in customer: ``(user, headers)``."""
    user, token = identity_provider.register("meera@example.com")
    return user, {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(identity_provider):
    current_domain.process(AddAdmin(username="owner@aishwarya.in", password="s3cret!"), asynchronous=False)
    _, token = identity_provider.register("owner@aishwarya.in")
    return {"Authorization": f"Bearer {token}"}
