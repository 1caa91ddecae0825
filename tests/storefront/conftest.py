import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    bed = DomainFixture(storefront)
    bed.setup()
    setup_db(storefront)
    yield bed
    drop_db(storefront)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def identity_provider():
    from storefront.auth import reset_identity_provider, set_identity_provider
    from storefront.auth.fake_adapter import FakeIdentityProvider

    provider = FakeIdentityProvider()
    set_identity_provider(provider)
    yield provider
    reset_identity_provider()


@pytest.fixture(autouse=True)
def gateway():
    from storefront.payments.gateway import reset_gateway, set_gateway
    from storefront.payments.gateway.fake_adapter import FakeGateway

    fake = FakeGateway()
    set_gateway(fake)
    yield fake
    reset_gateway()


@pytest.fixture()
def add_product():
    """Factory: list a product through the back-office command, return its id."""
    from storefront.catalogue.management import AddProduct

    def _add(name="Banarasi Silk Saree", category="Sarees", price="1,200", stock=5, sizes=None, **extra):
        command = AddProduct(
            name=name,
            category=category,
            price=price,
            stock=stock,
            sizes=sizes,
            **extra,
        )
        return current_domain.process(command, asynchronous=False)

    return _add


@pytest.fixture()
def fill_cart():
    """Factory: put products in a customer's cart, one line per id."""
    from storefront.cart.items import AddToCart

    def _fill(owner_id, *product_ids, size=None):
        for product_id in product_ids:
            current_domain.process(
                AddToCart(owner_id=owner_id, product_id=product_id, selected_size=size),
                asynchronous=False,
            )

    return _fill


@pytest.fixture()
def shipping():
    return {
        "first_name": "Meera",
        "last_name": "Iyer",
        "address": "12 Temple Street",
        "city": "Chennai",
        "pincode": "600004",
        "state": "Tamil Nadu",
    }


@pytest.fixture()
def placed_order(add_product, fill_cart, shipping):
    """Factory: check out a fresh product for ``customer_id``, return the order id."""
    from storefront.checkout.service import place_order

    def _place(customer_id="user-001", *product_ids, **product_fields):
        if not product_ids:
            product_ids = (add_product(**product_fields),)
        fill_cart(customer_id, *product_ids)
        return place_order(customer_id, shipping)

    return _place


@pytest.fixture()
def move_order():
    """Factory: walk an order through a sequence of statuses."""
    from storefront.order.status import change_order_status

    def _move(order_id, *statuses):
        result = None
        for status in statuses:
            result = change_order_status(order_id, status, changed_by="admin@aishwarya.in")
        return result

    return _move
