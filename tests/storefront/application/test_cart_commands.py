"""Tests for the cart commands."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from storefront.cart.cart import Cart
from storefront.cart.items import ClearCart, RemoveFromCart


def _cart(owner_id):
    return current_domain.repository_for(Cart).for_owner(owner_id)


class TestAddToCart:
    def test_cart_created_on_first_add(self, add_product, fill_cart):
        assert _cart("user-001") is None
        fill_cart("user-001", add_product())
        assert len(_cart("user-001").items) == 1

    def test_line_snapshots_product(self, add_product, fill_cart):
        product_id = add_product(name="Chanderi Saree", category="Sarees", price="2,450", image_url="/img/c.jpg")
        fill_cart("user-001", product_id, size="Free")
        line = _cart("user-001").lines()[0]
        assert line.name == "Chanderi Saree"
        assert line.category == "Sarees"
        assert line.price == "2,450"
        assert line.image_url == "/img/c.jpg"
        assert line.selected_size == "Free"

    def test_discounted_price_snapshotted(self, add_product, fill_cart):
        fill_cart("user-001", add_product(price="1,500", discount_price="1,299"))
        assert _cart("user-001").lines()[0].price == "1,299"

    def test_same_product_twice_gives_two_lines(self, add_product, fill_cart):
        product_id = add_product()
        fill_cart("user-001", product_id, product_id)
        assert len(_cart("user-001").items) == 2

    def test_no_stock_check_at_add_time(self, add_product, fill_cart):
        fill_cart("user-001", add_product(stock=0))
        assert len(_cart("user-001").items) == 1

    def test_unknown_product(self, fill_cart):
        with pytest.raises(ObjectNotFoundError):
            fill_cart("user-001", "missing-product")

    def test_carts_are_per_owner(self, add_product, fill_cart):
        product_id = add_product()
        fill_cart("user-a", product_id)
        fill_cart("user-b", product_id, product_id)
        assert len(_cart("user-a").items) == 1
        assert len(_cart("user-b").items) == 2

    def test_total(self, add_product, fill_cart):
        fill_cart("user-001", add_product(price="1,200"), add_product(name="Kurti", price="850"))
        assert _cart("user-001").total == 2050


class TestRemoveAndClear:
    def test_remove_by_index(self, add_product, fill_cart):
        first = add_product(name="First")
        second = add_product(name="Second")
        fill_cart("user-001", first, second)

        current_domain.process(RemoveFromCart(owner_id="user-001", index=0), asynchronous=False)

        lines = _cart("user-001").lines()
        assert [line.name for line in lines] == ["Second"]

    def test_remove_out_of_range(self, add_product, fill_cart):
        fill_cart("user-001", add_product())
        with pytest.raises(ValidationError) as exc_info:
            current_domain.process(RemoveFromCart(owner_id="user-001", index=3), asynchronous=False)
        assert "index" in exc_info.value.messages

    def test_clear(self, add_product, fill_cart):
        fill_cart("user-001", add_product(), add_product(name="Kurti"))
        current_domain.process(ClearCart(owner_id="user-001"), asynchronous=False)
        assert _cart("user-001").is_empty

    def test_clear_without_cart_is_harmless(self):
        current_domain.process(ClearCart(owner_id="user-new"), asynchronous=False)
        assert _cart("user-new") is None
