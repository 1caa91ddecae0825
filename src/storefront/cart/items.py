"""Cart item management: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Cart")
class AddToCart:
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)
    selected_size = String(max_length=20)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    owner_id = Identifier(required=True)
    index = Integer(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    owner_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class CartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)

        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create(command.owner_id)
        cart.add_item(
            product_id=str(product.id),
            name=product.name,
            price=product.listed_price,
            category=product.category,
            image_url=product.image_url,
            selected_size=command.selected_size,
        )
        repo.add(cart)
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create(command.owner_id)
        cart.remove_item(command.index)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_owner(command.owner_id)
        if cart is not None and not cart.is_empty:
            cart.clear()
            repo.add(cart)
