"""Back-office dashboard figures."""

from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.order.order import Order, OrderStatus


def dashboard() -> dict:
    product_repo = current_domain.repository_for(Product)
    order_repo = current_domain.repository_for(Order)
    orders = order_repo.list_all()

    return {
        "products": product_repo.count(),
        "categories": current_domain.repository_for(Category).count(),
        "pending_orders": order_repo.count_with_status(OrderStatus.PENDING),
        "total_sales": round(sum(o.total or 0 for o in orders), 2),
        "recent_products": [
            {
                "id": str(p.id),
                "name": p.name,
                "category": p.category,
                "price": p.price,
                "stock": p.stock,
                "image_url": p.image_url,
            }
            for p in product_repo.newest(5)
        ],
    }
