"""Storefront API package."""

from storefront.api.admin_routes import admin_login_router, admin_router
from storefront.api.payment_routes import payment_router
from storefront.api.routes import (
    address_router,
    cart_router,
    category_router,
    checkout_router,
    newsletter_router,
    order_router,
    product_router,
    review_router,
    wishlist_router,
)

ALL_ROUTERS = [
    product_router,
    category_router,
    cart_router,
    address_router,
    checkout_router,
    order_router,
    wishlist_router,
    review_router,
    newsletter_router,
    payment_router,
    admin_login_router,
    admin_router,
]

__all__ = ["ALL_ROUTERS", "admin_router", "payment_router", "product_router"]
