"""FastAPI routes for the back-office. Every route requires an admin token."""

import json
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response
from protean.utils.globals import current_domain

from storefront.access.admin import Admin
from storefront.access.directory import create_customer, delete_customer, list_customers
from storefront.access.management import AddAdmin, RemoveAdmin, check_admin_credentials
from storefront.api.deps import require_admin
from storefront.api.schemas import (
    AdjustStockRequest,
    AdminIdResponse,
    AdminRequest,
    CategoryIdResponse,
    CategoryRequest,
    CreateCustomerRequest,
    DispatchSlipsRequest,
    OrderStatusResponse,
    ProductIdResponse,
    ProductRequest,
    StatusResponse,
    UpdateCategoryRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
)
from storefront.catalogue.management import (
    AddCategory,
    AddProduct,
    AdjustStock,
    RemoveCategory,
    RemoveProduct,
    UpdateCategory,
    UpdateProduct,
    process_product_change,
)
from storefront.dispatch.slip import build_slips, slip_for
from storefront.dispatch.writer import get_writer
from storefront.order.order import Order
from storefront.order.status import change_order_status
from storefront.reporting.dashboard import dashboard
from storefront.reporting.sales import sales_report

admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])

# Credential check for the admin sign-in form; no token yet at that point.
admin_login_router = APIRouter(prefix="/admin", tags=["admin"])


def _json_sizes(sizes):
    return json.dumps(sizes) if sizes is not None else None


def _document(content: bytes, filename: str) -> Response:
    writer = get_writer()
    return Response(
        content=content,
        media_type=writer.media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}.{writer.extension}"'},
    )


@admin_login_router.post("/login", response_model=StatusResponse)
async def admin_login(body: AdminRequest) -> StatusResponse:
    if not check_admin_credentials(body.username, body.password):
        raise HTTPException(
            status_code=401,
            detail="Invalid admin credentials. Please check your username and password.",
        )
    return StatusResponse()


# ---------------------------------------------------------------------------
# Dashboard and reports
# ---------------------------------------------------------------------------
@admin_router.get("/dashboard")
async def get_dashboard() -> dict:
    return dashboard()


@admin_router.get("/reports/sales")
async def download_sales_report(start_date: date, end_date: date) -> Response:
    content = sales_report(start_date, end_date)
    return _document(content, f"Aishwarya_Collections_Report_{start_date}_to_{end_date}")


# ---------------------------------------------------------------------------
# Products and categories
# ---------------------------------------------------------------------------
@admin_router.post("/products", status_code=201, response_model=ProductIdResponse)
async def add_product(body: ProductRequest) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        category=body.category,
        price=body.price,
        discount_price=body.discount_price,
        stock=body.stock,
        sizes=_json_sizes(body.sizes),
        image_url=body.image_url,
        description=body.description,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@admin_router.put("/products/{product_id}", response_model=ProductIdResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> ProductIdResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        category=body.category,
        price=body.price,
        discount_price=body.discount_price,
        sizes=_json_sizes(body.sizes),
        image_url=body.image_url,
        description=body.description,
    )
    process_product_change(command)
    return ProductIdResponse(product_id=product_id)


@admin_router.put("/products/{product_id}/stock")
async def adjust_stock(product_id: str, body: AdjustStockRequest) -> dict:
    stock = process_product_change(AdjustStock(product_id=product_id, stock=body.stock))
    return {"product_id": product_id, "stock": stock}


@admin_router.delete("/products/{product_id}", response_model=StatusResponse)
async def remove_product(product_id: str) -> StatusResponse:
    process_product_change(RemoveProduct(product_id=product_id))
    return StatusResponse()


@admin_router.post("/categories", status_code=201, response_model=CategoryIdResponse)
async def add_category(body: CategoryRequest) -> CategoryIdResponse:
    command = AddCategory(name=body.name, parent=body.parent, image_url=body.image_url)
    result = current_domain.process(command, asynchronous=False)
    return CategoryIdResponse(category_id=result)


@admin_router.put("/categories/{category_id}", response_model=CategoryIdResponse)
async def update_category(category_id: str, body: UpdateCategoryRequest) -> CategoryIdResponse:
    command = UpdateCategory(category_id=category_id, name=body.name, parent=body.parent, image_url=body.image_url)
    current_domain.process(command, asynchronous=False)
    return CategoryIdResponse(category_id=category_id)


@admin_router.delete("/categories/{category_id}", response_model=StatusResponse)
async def remove_category(category_id: str) -> StatusResponse:
    current_domain.process(RemoveCategory(category_id=category_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Orders and dispatch
# ---------------------------------------------------------------------------
@admin_router.get("/orders")
async def list_orders(status: str | None = None) -> dict:
    orders = current_domain.repository_for(Order).list_all()
    if status:
        orders = [o for o in orders if o.status == status]
    return {"orders": [o.to_dict() for o in orders]}


@admin_router.put("/orders/{order_id}/status", response_model=OrderStatusResponse)
async def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, admin=Depends(require_admin)
) -> OrderStatusResponse:
    """Move an order along its lifecycle and hand back a fresh slip link."""
    new_status = change_order_status(order_id, body.status, changed_by=admin.email)
    order = current_domain.repository_for(Order).get(order_id)
    slip_url = None if order.is_delivered else f"/admin/orders/{order_id}/slip"
    return OrderStatusResponse(order_id=order_id, status=new_status, slip_url=slip_url)


@admin_router.get("/orders/{order_id}/slip")
async def get_dispatch_slip(order_id: str) -> Response:
    return _document(slip_for(order_id), f"dispatch_slip_{order_id[:8]}")


@admin_router.post("/orders/slips")
async def get_dispatch_slips(body: DispatchSlipsRequest) -> Response:
    return _document(build_slips(body.order_ids), "dispatch_slips")


# ---------------------------------------------------------------------------
# Admins and customers
# ---------------------------------------------------------------------------
@admin_router.get("/admins")
async def list_admins() -> dict:
    admins = current_domain.repository_for(Admin).list_all()
    return {"admins": [a.to_dict() for a in admins]}


@admin_router.post("/admins", status_code=201, response_model=AdminIdResponse)
async def add_admin(body: AdminRequest) -> AdminIdResponse:
    result = current_domain.process(AddAdmin(username=body.username, password=body.password), asynchronous=False)
    return AdminIdResponse(admin_id=result)


@admin_router.delete("/admins/{admin_id}", response_model=StatusResponse)
async def remove_admin(admin_id: str) -> StatusResponse:
    current_domain.process(RemoveAdmin(admin_id=admin_id), asynchronous=False)
    return StatusResponse()


@admin_router.get("/customers")
async def get_customers() -> dict:
    return {"customers": list_customers()}


@admin_router.post("/customers", status_code=201)
async def add_customer(body: CreateCustomerRequest) -> dict:
    return create_customer(body.email, body.password, full_name=body.full_name, role=body.role)


@admin_router.delete("/customers", response_model=StatusResponse)
async def remove_customer(id: str) -> StatusResponse:  # noqa: A002
    delete_customer(id)
    return StatusResponse()
