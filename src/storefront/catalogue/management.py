"""Back-office product and category management: commands and handlers."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.checkout.locks import process_holding_stock
from storefront.domain import storefront
from storefront.shared.money import parse_amount
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _optional_amount(value, field):
    if value is None or str(value).strip() == "":
        return None
    return parse_amount(value, field=field)


@storefront.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    category: String(required=True, max_length=100)
    price: String(required=True, max_length=50)  # Accepts "1,200"
    discount_price: String(max_length=50)
    stock: Integer(default=0)
    sizes: Text()  # JSON: {"S": 2, "M": 3}
    image_url: String(max_length=500)
    description: Text()


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    category: String(max_length=100)
    price: String(max_length=50)
    discount_price: String(max_length=50)
    sizes: Text()
    image_url: String(max_length=500)
    description: Text()


@storefront.command(part_of="Product")
class AdjustStock:
    product_id: Identifier(required=True)
    stock: Integer(required=True)


@storefront.command(part_of="Product")
class RemoveProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name=command.name,
            category=command.category,
            price=parse_amount(command.price),
            discount_price=_optional_amount(command.discount_price, "discount_price"),
            stock=max(0, command.stock or 0),
            sizes=command.sizes,
            image_url=command.image_url,
            description=command.description,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_added", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            category=command.category,
            price=_optional_amount(command.price, "price"),
            discount_price=_optional_amount(command.discount_price, "discount_price"),
            sizes=command.sizes,
            image_url=command.image_url,
            description=command.description,
        )
        repo.add(product)
        return str(product.id)

    @handle(AdjustStock)
    def adjust_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.adjust_stock(command.stock)
        repo.add(product)
        logger.info("stock_adjusted", product_id=str(product.id), stock=product.stock)
        return product.stock

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("product_removed", product_id=str(command.product_id))


def process_product_change(command):
    """Run a command that rewrites one existing product under its stock lock."""
    return process_holding_stock(command, [command.product_id])


@storefront.command(part_of="Category")
class AddCategory:
    name: String(required=True, max_length=100)
    parent: String(max_length=100)
    image_url: String(max_length=500)


@storefront.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    parent: String(max_length=100)
    image_url: String(max_length=500)


@storefront.command(part_of="Category")
class RemoveCategory:
    category_id: Identifier(required=True)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(AddCategory)
    def add_category(self, command):
        repo = current_domain.repository_for(Category)
        if repo.find_by_name(command.name) is not None:
            raise ValidationError({"name": [f"Category '{command.name}' already exists"]})
        if command.parent and repo.find_by_name(command.parent) is None:
            raise ValidationError({"parent": [f"Parent category '{command.parent}' does not exist"]})

        category = Category.create(name=command.name, parent=command.parent, image_url=command.image_url)
        repo.add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        if command.name:
            clash = repo.find_by_name(command.name)
            if clash is not None and str(clash.id) != str(category.id):
                raise ValidationError({"name": [f"Category '{command.name}' already exists"]})

        category.update_details(name=command.name, parent=command.parent, image_url=command.image_url)
        repo.add(category)
        return str(category.id)

    @handle(RemoveCategory)
    def remove_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        repo._dao.delete(category)
