"""FastAPI routes for shoppers: catalogue, cart, checkout, orders and the rest."""

from fastapi import APIRouter, Depends, Header
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.access.roles import CurrentUser
from storefront.addresses.book import SaveAddress, address_book
from storefront.api.deps import get_current_user
from storefront.api.schemas import (
    AddressIdResponse,
    AddToCartRequest,
    CheckoutRequest,
    OrderIdResponse,
    ReviewIdResponse,
    SaveAddressRequest,
    StatusResponse,
    SubmitReviewRequest,
    SubscribeRequest,
    WishlistToggleResponse,
)
from storefront.cart.cart import Cart
from storefront.cart.items import AddToCart, ClearCart, RemoveFromCart
from storefront.catalogue.category import Category
from storefront.catalogue.product import Product, stock_badge
from storefront.checkout.service import place_order
from storefront.engagement.newsletter import Subscribe
from storefront.engagement.reviews import ProductReview, SubmitReview
from storefront.engagement.wishlist import ToggleWishlist, WishlistEntry
from storefront.order.order import Order


def product_view(product: Product) -> dict:
    return {
        "id": str(product.id),
        "name": product.name,
        "category": product.category,
        "price": product.price,
        "discount_price": product.discount_price,
        "listed_price": product.listed_price,
        "stock": product.stock,
        "stock_badge": stock_badge(product.stock),
        "sizes": product.size_quantities(),
        "image_url": product.image_url,
        "description": product.description,
    }


def cart_view(cart: Cart | None) -> dict:
    if cart is None:
        return {"items": [], "total": 0.0, "count": 0}
    return {
        "items": [
            {
                "index": index,
                "product_id": str(item.product_id),
                "name": item.name,
                "category": item.category,
                "price": item.price,
                "image_url": item.image_url,
                "selected_size": item.selected_size,
            }
            for index, item in enumerate(cart.lines())
        ],
        "total": cart.total,
        "count": len(cart.items),
    }


# ---------------------------------------------------------------------------
# Catalogue Routers
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("")
async def list_products(category: str | None = None, search: str | None = None) -> dict:
    categories = None
    if category:
        categories = current_domain.repository_for(Category).with_subcategories(category)
    products = current_domain.repository_for(Product).browse(categories=categories, search=search)
    return {"products": [product_view(p) for p in products]}


@product_router.get("/{product_id}")
async def get_product(product_id: str) -> dict:
    product = current_domain.repository_for(Product).get(product_id)
    return product_view(product)


@product_router.get("/{product_id}/reviews")
async def list_product_reviews(product_id: str) -> dict:
    reviews = current_domain.repository_for(ProductReview).for_product(product_id)
    return {"reviews": [r.to_dict() for r in reviews]}


category_router = APIRouter(prefix="/categories", tags=["categories"])


@category_router.get("")
async def list_categories() -> dict:
    categories = current_domain.repository_for(Category).list_by_name()
    return {
        "categories": [
            {"id": str(c.id), "name": c.name, "parent": c.parent, "image_url": c.image_url} for c in categories
        ]
    }


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("")
async def get_cart(user: CurrentUser = Depends(get_current_user)) -> dict:
    return cart_view(current_domain.repository_for(Cart).for_owner(user.id))


@cart_router.post("/items", status_code=201)
async def add_cart_item(body: AddToCartRequest, user: CurrentUser = Depends(get_current_user)) -> dict:
    command = AddToCart(owner_id=user.id, product_id=body.product_id, selected_size=body.selected_size)
    current_domain.process(command, asynchronous=False)
    return cart_view(current_domain.repository_for(Cart).for_owner(user.id))


@cart_router.delete("/items/{index}")
async def remove_cart_item(index: int, user: CurrentUser = Depends(get_current_user)) -> dict:
    current_domain.process(RemoveFromCart(owner_id=user.id, index=index), asynchronous=False)
    return cart_view(current_domain.repository_for(Cart).for_owner(user.id))


@cart_router.delete("", response_model=StatusResponse)
async def clear_cart(user: CurrentUser = Depends(get_current_user)) -> StatusResponse:
    current_domain.process(ClearCart(owner_id=user.id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Address Router
# ---------------------------------------------------------------------------
address_router = APIRouter(prefix="/addresses", tags=["addresses"])


@address_router.get("")
async def get_address_book(user: CurrentUser = Depends(get_current_user)) -> dict:
    return address_book(user.id)


@address_router.post("", status_code=201, response_model=AddressIdResponse)
async def save_address(body: SaveAddressRequest, user: CurrentUser = Depends(get_current_user)) -> AddressIdResponse:
    command = SaveAddress(
        owner_id=user.id,
        first_name=body.first_name,
        last_name=body.last_name,
        address=body.address,
        city=body.city,
        pincode=body.pincode,
        state=body.state,
        is_default=body.is_default,
    )
    result = current_domain.process(command, asynchronous=False)
    return AddressIdResponse(address_id=result)


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", status_code=201, response_model=OrderIdResponse)
async def checkout(
    body: CheckoutRequest,
    user: CurrentUser = Depends(get_current_user),
    idempotency_key: str | None = Header(default=None),
) -> OrderIdResponse:
    """Place an order from the caller's cart.

    The idempotency key comes from the ``Idempotency-Key`` header or the body;
    repeating a request with the same key returns the first order.
    """
    order_id = place_order(
        customer_id=user.id,
        shipping=body.shipping.model_dump(),
        payment_method=body.payment_method,
        idempotency_key=idempotency_key or body.idempotency_key,
        save_address=body.save_address,
    )
    return OrderIdResponse(order_id=order_id)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("")
async def list_my_orders(user: CurrentUser = Depends(get_current_user)) -> dict:
    orders = current_domain.repository_for(Order).for_customer(user.id)
    return {"orders": [o.to_dict() for o in orders]}


@order_router.get("/{order_id}")
async def get_my_order(order_id: str, user: CurrentUser = Depends(get_current_user)) -> dict:
    order = current_domain.repository_for(Order).get(order_id)
    if str(order.customer_id) != user.id:
        raise ObjectNotFoundError({"_entity": f"Order with id {order_id} does not exist"})
    return order.to_dict()


# ---------------------------------------------------------------------------
# Wishlist, Reviews and Newsletter Routers
# ---------------------------------------------------------------------------
wishlist_router = APIRouter(prefix="/wishlist", tags=["wishlist"])


@wishlist_router.get("")
async def get_wishlist(user: CurrentUser = Depends(get_current_user)) -> dict:
    entries = current_domain.repository_for(WishlistEntry).for_owner(user.id)
    return {"product_ids": [str(e.product_id) for e in entries]}


@wishlist_router.post("/{product_id}", response_model=WishlistToggleResponse)
async def toggle_wishlist(product_id: str, user: CurrentUser = Depends(get_current_user)) -> WishlistToggleResponse:
    listed = current_domain.process(ToggleWishlist(owner_id=user.id, product_id=product_id), asynchronous=False)
    return WishlistToggleResponse(product_id=product_id, in_wishlist=listed)


review_router = APIRouter(prefix="/reviews", tags=["reviews"])


@review_router.post("", status_code=201, response_model=ReviewIdResponse)
async def submit_review(body: SubmitReviewRequest, user: CurrentUser = Depends(get_current_user)) -> ReviewIdResponse:
    command = SubmitReview(
        order_id=body.order_id,
        product_id=body.product_id,
        user_id=user.id,
        rating=body.rating,
        comment=body.comment,
        image_url=body.image_url,
    )
    result = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=result)


newsletter_router = APIRouter(prefix="/newsletter", tags=["newsletter"])


@newsletter_router.post("", status_code=201, response_model=StatusResponse)
async def subscribe(body: SubscribeRequest) -> StatusResponse:
    current_domain.process(Subscribe(email=body.email), asynchronous=False)
    return StatusResponse(status="subscribed")
