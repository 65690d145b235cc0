"""FastAPI routes for the Storefront — catalog, cart, orders, reviews and admin."""

from fastapi import APIRouter, Depends

from storefront.api.auth import UserContext, admin_user, current_user
from storefront.api.schemas import (
    AddToCartRequest,
    CartLineResponse,
    CartResponse,
    CheckoutRequest,
    OrderIdResponse,
    OrderResponse,
    OrderSummaryResponse,
    PriceSummaryResponse,
    ProductIdResponse,
    ProductRequest,
    ProductResponse,
    ProductReviewsResponse,
    ReviewIdResponse,
    ReviewResponse,
    SetOrderStatusRequest,
    StatusResponse,
    SubmitReviewRequest,
    UpdateCartQuantityRequest,
)
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from storefront.cart.listing import checkout_lines, list_cart
from storefront.checkout.placement import place_order
from storefront.order.access import load_order_for
from storefront.order.cancellation import cancel_order
from storefront.order.queries import all_orders, order_history
from storefront.order.status import set_order_status
from storefront.product.listing import list_products
from storefront.product.management import AddProduct, DiscontinueProduct, UpdateProduct
from storefront.review.listing import product_reviews
from storefront.review.removal import remove_review
from storefront.review.submission import submit_review
from storefront.shared.retry import process_with_retry

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(user: UserContext = Depends(current_user)) -> CartResponse:
    listing = list_cart(user.user_id)
    return CartResponse(
        lines=[CartLineResponse.from_line(line) for line in listing.lines],
        summary=PriceSummaryResponse.from_breakdown(listing.summary),
    )


@cart_router.post("/items", status_code=201, response_model=StatusResponse)
async def add_cart_item(body: AddToCartRequest, user: UserContext = Depends(current_user)) -> StatusResponse:
    process_with_retry(
        AddToCart(customer_id=user.user_id, product_id=body.product_id, quantity=body.quantity)
    )
    return StatusResponse()


@cart_router.patch("/items/{product_id}", response_model=StatusResponse)
async def update_cart_item(
    product_id: str,
    body: UpdateCartQuantityRequest,
    user: UserContext = Depends(current_user),
) -> StatusResponse:
    process_with_retry(
        UpdateCartQuantity(customer_id=user.user_id, product_id=product_id, quantity=body.quantity)
    )
    return StatusResponse()


@cart_router.delete("/items/{product_id}", response_model=StatusResponse)
async def remove_cart_item(product_id: str, user: UserContext = Depends(current_user)) -> StatusResponse:
    process_with_retry(RemoveFromCart(customer_id=user.user_id, product_id=product_id))
    return StatusResponse()


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def checkout(body: CheckoutRequest, user: UserContext = Depends(current_user)) -> OrderIdResponse:
    if body.items is None:
        lines = checkout_lines(user.user_id)
    else:
        lines = [line.model_dump() for line in body.items]

    order_id = place_order(
        customer_id=user.user_id,
        shipping_address=body.shipping_address,
        phone_number=body.phone_number,
        notes=body.notes,
        lines=lines,
        client_total=body.total,
    )
    return OrderIdResponse(order_id=order_id)


@order_router.get("", response_model=list[OrderSummaryResponse])
async def get_order_history(user: UserContext = Depends(current_user)) -> list[OrderSummaryResponse]:
    return [OrderSummaryResponse.from_summary(s) for s in order_history(user.user_id)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, user: UserContext = Depends(current_user)) -> OrderResponse:
    order = load_order_for(order_id, requested_by=user.user_id, is_admin=user.is_admin)
    return OrderResponse.from_order(order)


@order_router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel(order_id: str, user: UserContext = Depends(current_user)) -> OrderResponse:
    order = cancel_order(order_id, requested_by=user.user_id, is_admin=user.is_admin)
    return OrderResponse.from_order(order)


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin", tags=["admin"])


@admin_router.get("/orders", response_model=list[OrderSummaryResponse])
async def list_orders(
    status: str | None = None,
    user: UserContext = Depends(admin_user),
) -> list[OrderSummaryResponse]:
    return [OrderSummaryResponse.from_summary(s) for s in all_orders(status)]


@admin_router.patch("/orders/{order_id}", response_model=OrderResponse)
async def change_order_status(
    order_id: str,
    body: SetOrderStatusRequest,
    user: UserContext = Depends(current_user),
) -> OrderResponse:
    order = set_order_status(
        order_id,
        body.status,
        requested_by=user.user_id,
        is_admin=user.is_admin,
        payment_status=body.payment_status,
    )
    return OrderResponse.from_order(order)


@admin_router.get("/products", response_model=list[ProductResponse])
async def get_products(user: UserContext = Depends(admin_user)) -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in list_products()]


@admin_router.post("/products", status_code=201, response_model=ProductIdResponse)
async def add_product(body: ProductRequest, user: UserContext = Depends(admin_user)) -> ProductIdResponse:
    product_id = process_with_retry(AddProduct(**body.model_dump()))
    return ProductIdResponse(product_id=product_id)


@admin_router.put("/products/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    body: ProductRequest,
    user: UserContext = Depends(admin_user),
) -> ProductResponse:
    product = process_with_retry(UpdateProduct(product_id=product_id, **body.model_dump()))
    return ProductResponse.from_product(product)


@admin_router.delete("/products/{product_id}", response_model=StatusResponse)
async def discontinue_product(product_id: str, user: UserContext = Depends(admin_user)) -> StatusResponse:
    process_with_retry(DiscontinueProduct(product_id=product_id))
    return StatusResponse()


# ---------------------------------------------------------------------------
# Catalog Router
# ---------------------------------------------------------------------------
catalog_router = APIRouter(prefix="/products", tags=["catalog"])


@catalog_router.get("", response_model=list[ProductResponse])
async def get_catalog() -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in list_products()]


# ---------------------------------------------------------------------------
# Review Router
# ---------------------------------------------------------------------------
review_router = APIRouter(prefix="/reviews", tags=["reviews"])


@review_router.post("", status_code=201, response_model=ReviewIdResponse)
async def post_review(body: SubmitReviewRequest, user: UserContext = Depends(current_user)) -> ReviewIdResponse:
    review_id = submit_review(
        product_id=body.product_id,
        customer_id=user.user_id,
        rating=body.rating,
        comment=body.comment,
    )
    return ReviewIdResponse(review_id=review_id)


@review_router.get("/{product_id}", response_model=ProductReviewsResponse)
async def get_product_reviews(product_id: str) -> ProductReviewsResponse:
    listing = product_reviews(product_id)
    return ProductReviewsResponse(
        reviews=[ReviewResponse.from_review(r) for r in listing.reviews],
        average_rating=float(listing.average_rating),
        total_reviews=listing.total_reviews,
    )


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str, user: UserContext = Depends(current_user)) -> StatusResponse:
    remove_review(review_id, requested_by=user.user_id, is_admin=user.is_admin)
    return StatusResponse()
