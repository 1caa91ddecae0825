"""Tests for the Cart aggregate: lines, removal by position, totals."""

import pytest
from protean.exceptions import ValidationError
from storefront.cart.cart import Cart
from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved


def _make_cart():
    return Cart.create(owner_id="user-001")


def _add(cart, product_id="prod-001", price="1,200", size=None, name="Silk Saree"):
    return cart.add_item(product_id=product_id, name=name, price=price, category="Sarees", selected_size=size)


class TestAddItem:
    def test_appends_a_line(self):
        cart = _make_cart()
        _add(cart)
        assert len(cart.items) == 1
        assert cart.lines()[0].price == "1,200"

    def test_same_product_twice_gives_two_lines(self):
        cart = _make_cart()
        _add(cart)
        _add(cart)
        assert len(cart.items) == 2

    def test_lines_keep_insertion_order(self):
        cart = _make_cart()
        _add(cart, product_id="prod-a")
        _add(cart, product_id="prod-b")
        _add(cart, product_id="prod-c")
        assert [str(line.product_id) for line in cart.lines()] == ["prod-a", "prod-b", "prod-c"]

    def test_size_is_kept(self):
        cart = _make_cart()
        _add(cart, size="M")
        assert cart.lines()[0].selected_size == "M"

    def test_raises_item_added(self):
        cart = _make_cart()
        _add(cart)
        assert isinstance(cart._events[-1], CartItemAdded)


class TestRemoveItem:
    def test_removes_by_position(self):
        cart = _make_cart()
        _add(cart, product_id="prod-a")
        _add(cart, product_id="prod-b")
        cart.remove_item(0)
        assert [str(line.product_id) for line in cart.lines()] == ["prod-b"]
        assert isinstance(cart._events[-1], CartItemRemoved)

    def test_out_of_range_is_rejected(self):
        cart = _make_cart()
        _add(cart)
        with pytest.raises(ValidationError) as exc_info:
            cart.remove_item(3)
        assert "index" in exc_info.value.messages

    def test_negative_index_is_rejected(self):
        cart = _make_cart()
        _add(cart)
        with pytest.raises(ValidationError):
            cart.remove_item(-1)

    def test_positions_continue_after_removal(self):
        cart = _make_cart()
        _add(cart, product_id="prod-a")
        _add(cart, product_id="prod-b")
        cart.remove_item(1)
        _add(cart, product_id="prod-c")
        assert [str(line.product_id) for line in cart.lines()] == ["prod-a", "prod-c"]


class TestTotalsAndClear:
    def test_total_strips_separators(self):
        cart = _make_cart()
        _add(cart, price="1,200")
        _add(cart, price="850")
        assert cart.total == 2050

    def test_clear_empties_cart(self):
        cart = _make_cart()
        _add(cart)
        _add(cart)
        cart.clear()
        assert cart.is_empty
        assert cart.total == 0
        event = cart._events[-1]
        assert isinstance(event, CartCleared)
        assert event.item_count == 2
