"""Concurrent writers on the same product: checkouts, cancellations and back-office edits.

Each worker runs in its own thread and domain context. ``Product.withdraw`` is
slowed down so the first checkout is still inside its unit of work when the
competing writer starts.
"""

import threading
import time

import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from storefront.catalogue.management import UpdateProduct, process_product_change
from storefront.catalogue.product import Product
from storefront.checkout.service import place_order
from storefront.order.order import Order
from storefront.order.status import change_order_status

HOLD_SECONDS = 0.3


@pytest.fixture()
def slow_withdraw(monkeypatch):
    """Make checkouts linger after withdrawing; the event fires on the first withdrawal."""
    withdrawing = threading.Event()
    original = Product.withdraw

    def _withdraw(self, *args, **kwargs):
        result = original(self, *args, **kwargs)
        withdrawing.set()
        time.sleep(HOLD_SECONDS)
        return result

    monkeypatch.setattr(Product, "withdraw", _withdraw)
    return withdrawing


@pytest.fixture()
def in_thread(storefront_bed):
    """Factory: start ``fn`` in a thread with its own domain context; collect results and errors."""
    results, errors, threads = [], [], []

    def _start(fn, *args, **kwargs):
        def _run():
            with storefront_bed.domain.domain_context():
                try:
                    results.append(fn(*args, **kwargs))
                except Exception as exc:
                    errors.append(exc)

        thread = threading.Thread(target=_run)
        thread.start()
        threads.append(thread)
        return thread

    def _join():
        for thread in threads:
            thread.join(timeout=10)
        return results, errors

    _start.join = _join
    return _start


def _product(product_id):
    return current_domain.repository_for(Product).get(product_id)


class TestCompetingCheckouts:
    def test_last_unit_sold_once(self, add_product, fill_cart, shipping, slow_withdraw, in_thread):
        product_id = add_product(stock=1)
        fill_cart("user-001", product_id)
        fill_cart("user-002", product_id)

        in_thread(place_order, "user-001", shipping)
        in_thread(place_order, "user-002", shipping)
        results, errors = in_thread.join()

        assert len(results) == 1
        assert len(errors) == 1
        assert isinstance(errors[0], ValidationError)
        assert "stock" in errors[0].messages
        assert _product(product_id).stock == 0
        orders = current_domain.repository_for(Order).list_all()
        assert [str(o.id) for o in orders] == results


class TestCancellationDuringCheckout:
    def test_restocked_unit_survives_concurrent_checkout(
        self, add_product, fill_cart, shipping, slow_withdraw, in_thread
    ):
        product_id = add_product(stock=2)
        fill_cart("user-001", product_id)
        first_order = place_order("user-001", shipping)
        slow_withdraw.clear()
        fill_cart("user-002", product_id)

        in_thread(place_order, "user-002", shipping)
        assert slow_withdraw.wait(timeout=5)
        in_thread(change_order_status, first_order, "Cancelled", changed_by="admin@aishwarya.in")
        results, errors = in_thread.join()

        assert errors == []
        assert len(results) == 2
        assert _product(product_id).stock == 1


class TestBackOfficeEditDuringCheckout:
    def test_edit_keeps_the_withdrawal(self, add_product, fill_cart, shipping, slow_withdraw, in_thread):
        product_id = add_product(name="Chanderi Saree", stock=2)
        fill_cart("user-001", product_id)

        in_thread(place_order, "user-001", shipping)
        assert slow_withdraw.wait(timeout=5)
        in_thread(process_product_change, UpdateProduct(product_id=product_id, name="Chanderi Cotton Saree"))
        results, errors = in_thread.join()

        assert errors == []
        product = _product(product_id)
        assert product.stock == 1
        assert product.name == "Chanderi Cotton Saree"
