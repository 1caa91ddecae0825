"""Pydantic request/response schemas for the storefront API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ShippingSchema(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    address: str
    city: str
    pincode: str
    state: str | None = None


class StatusResponse(BaseModel):
    status: str = "ok"


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class ProductRequest(BaseModel):
    name: str
    category: str
    price: str
    discount_price: str | None = None
    stock: int = Field(default=0)
    sizes: dict[str, int] | None = None
    image_url: str | None = None
    description: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Kanjivaram Silk Saree",
                    "category": "Sarees",
                    "price": "12,500",
                    "stock": 4,
                    "sizes": {"Free Size": 4},
                    "image_url": "https://cdn.example.com/sarees/kanjivaram.jpg",
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = None
    category: str | None = None
    price: str | None = None
    discount_price: str | None = None
    sizes: dict[str, int] | None = None
    image_url: str | None = None
    description: str | None = None


class AdjustStockRequest(BaseModel):
    stock: int


class ProductIdResponse(BaseModel):
    product_id: str


class CategoryRequest(BaseModel):
    name: str
    parent: str | None = None
    image_url: str | None = None


class UpdateCategoryRequest(BaseModel):
    name: str | None = None
    parent: str | None = None
    image_url: str | None = None


class CategoryIdResponse(BaseModel):
    category_id: str


# ---------------------------------------------------------------------------
# Cart and checkout
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    selected_size: str | None = None


class SaveAddressRequest(ShippingSchema):
    is_default: bool = False


class AddressIdResponse(BaseModel):
    address_id: str


class CheckoutRequest(BaseModel):
    shipping: ShippingSchema
    payment_method: str | None = None
    save_address: bool = False
    idempotency_key: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping": {
                        "first_name": "Meera",
                        "last_name": "Iyer",
                        "address": "12 Temple Street",
                        "city": "Chennai",
                        "pincode": "600004",
                        "state": "Tamil Nadu",
                    },
                    "payment_method": "upi",
                    "save_address": True,
                    "idempotency_key": "checkout-7f3a",
                }
            ]
        }
    }


class OrderIdResponse(BaseModel):
    order_id: str


# ---------------------------------------------------------------------------
# Back-office orders
# ---------------------------------------------------------------------------
class UpdateOrderStatusRequest(BaseModel):
    status: str


class OrderStatusResponse(BaseModel):
    order_id: str
    status: str
    slip_url: str | None = None


class DispatchSlipsRequest(BaseModel):
    order_ids: list[str] = Field(min_length=1)


# ---------------------------------------------------------------------------
# Engagement
# ---------------------------------------------------------------------------
class WishlistToggleResponse(BaseModel):
    product_id: str
    in_wishlist: bool


class SubmitReviewRequest(BaseModel):
    order_id: str
    product_id: str
    rating: int = Field(ge=1, le=5)
    comment: str | None = None
    image_url: str | None = None


class ReviewIdResponse(BaseModel):
    review_id: str


class SubscribeRequest(BaseModel):
    email: str


# ---------------------------------------------------------------------------
# Access
# ---------------------------------------------------------------------------
class AdminRequest(BaseModel):
    username: str = ""
    password: str = ""


class AdminIdResponse(BaseModel):
    admin_id: str


class CreateCustomerRequest(BaseModel):
    email: str
    password: str
    full_name: str | None = None
    role: str = "customer"


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------
class PaymentDetails(BaseModel):
    razorpay_order_id: str | None = None
    razorpay_payment_id: str | None = None
    razorpay_signature: str | None = None


class RazorpayRequest(BaseModel):
    action: str | None = None
    amount: float | None = None
    currency: str = "INR"
    receipt: str | None = None
    order_id: str | None = None
    paymentDetails: PaymentDetails | None = None  # noqa: N815
