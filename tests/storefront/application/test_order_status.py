"""Tests for back-office order status changes."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from storefront.catalogue.product import Product
from storefront.order.order import Order


def _order(order_id):
    return current_domain.repository_for(Order).get(order_id)


def _stock(product_id):
    return current_domain.repository_for(Product).get(product_id).stock


class TestForwardMoves:
    def test_one_hop_at_a_time(self, placed_order, move_order):
        order_id = placed_order()
        assert move_order(order_id, "Preparing") == "Preparing"
        assert move_order(order_id, "Shipped") == "Shipped"
        assert move_order(order_id, "Delivered") == "Delivered"
        assert _order(order_id).tracking_step == 4

    def test_skipping_a_step_rejected(self, placed_order, move_order):
        order_id = placed_order()
        with pytest.raises(ValidationError) as exc_info:
            move_order(order_id, "Shipped")
        assert "Cannot transition from Pending to Shipped" in exc_info.value.messages["status"][0]
        assert _order(order_id).status == "Pending"

    def test_unknown_status_rejected(self, placed_order, move_order):
        order_id = placed_order()
        with pytest.raises(ValidationError) as exc_info:
            move_order(order_id, "Lost")
        assert "Unknown order status" in exc_info.value.messages["status"][0]

    def test_missing_order(self, move_order):
        with pytest.raises(ObjectNotFoundError):
            move_order("no-such-order", "Preparing")


class TestTerminalStates:
    def test_nothing_leaves_delivered(self, placed_order, move_order):
        order_id = placed_order()
        move_order(order_id, "Preparing", "Shipped", "Delivered")
        for target in ("Pending", "Preparing", "Shipped", "Cancelled"):
            with pytest.raises(ValidationError):
                move_order(order_id, target)
        assert _order(order_id).status == "Delivered"

    def test_nothing_leaves_cancelled(self, placed_order, move_order):
        order_id = placed_order()
        move_order(order_id, "Cancelled")
        for target in ("Pending", "Preparing", "Shipped", "Delivered"):
            with pytest.raises(ValidationError):
                move_order(order_id, target)


class TestCancellationRestocks:
    def test_cancel_pending_returns_units(self, add_product, placed_order, move_order):
        product_id = add_product(stock=3)
        order_id = placed_order("user-001", product_id, product_id)
        assert _stock(product_id) == 1

        move_order(order_id, "Cancelled")

        assert _stock(product_id) == 3
        assert _order(order_id).status == "Cancelled"

    def test_cancel_shipped_returns_units(self, add_product, placed_order, move_order):
        product_id = add_product(stock=2)
        order_id = placed_order("user-001", product_id)
        move_order(order_id, "Preparing", "Shipped", "Cancelled")
        assert _stock(product_id) == 2

    def test_cancel_returns_sized_units(self, add_product, fill_cart, shipping, move_order):
        from storefront.checkout.service import place_order

        product_id = add_product(stock=2, sizes='{"S": 1, "M": 1}')
        fill_cart("user-001", product_id, size="S")
        order_id = place_order("user-001", shipping)

        move_order(order_id, "Cancelled")

        product = current_domain.repository_for(Product).get(product_id)
        assert product.stock == 2
        assert product.size_quantities() == {"S": 1, "M": 1}

    def test_cancel_after_product_removed(self, add_product, placed_order, move_order):
        from storefront.catalogue.management import RemoveProduct

        product_id = add_product()
        order_id = placed_order("user-001", product_id)
        current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)

        assert move_order(order_id, "Cancelled") == "Cancelled"

    def test_other_moves_leave_stock_alone(self, add_product, placed_order, move_order):
        product_id = add_product(stock=2)
        order_id = placed_order("user-001", product_id)
        move_order(order_id, "Preparing", "Shipped", "Delivered")
        assert _stock(product_id) == 1
