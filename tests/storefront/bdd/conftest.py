"""Shared BDD fixtures and step definitions for the order status lifecycle."""

import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then
from storefront.catalogue.product import Product
from storefront.order.order import Order


@pytest.fixture()
def error():
    """Container for a captured validation error."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a "{name}" with {stock:d} pieces in stock'), target_fixture="product_id")
def _(add_product, name, stock):
    return add_product(name=name, stock=stock)


@given("a customer placed an order for it", target_fixture="order_id")
def _(placed_order, product_id):
    return placed_order("user-001", product_id)


@given(parsers.cfparse('the order was moved to "{status}"'))
def _(move_order, order_id, status):
    move_order(order_id, status)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def _(order_id, status):
    assert current_domain.repository_for(Order).get(order_id).status == status


@then(parsers.cfparse("the tracking step is {step:d}"))
def _(order_id, step):
    assert current_domain.repository_for(Order).get(order_id).tracking_step == step


@then(parsers.cfparse("the shelf holds {stock:d} pieces"))
def _(product_id, stock):
    assert current_domain.repository_for(Product).get(product_id).stock == stock


@then("the status change fails with a validation error")
def _(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)
