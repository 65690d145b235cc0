"""Pydantic request/response schemas for the Storefront API.

These are external contracts, separate from the internal Protean commands.
Money always crosses this boundary as a decimal string.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from storefront.shared.money import format_amount, from_cents


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = 1


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class CartLineResponse(BaseModel):
    product_id: str
    product_name: str | None
    unit_price: str | None
    quantity: int
    stock: int
    available: bool
    added_at: datetime | None

    @classmethod
    def from_line(cls, line):
        return cls(
            product_id=line.product_id,
            product_name=line.product_name,
            unit_price=format_amount(line.unit_price) if line.unit_price is not None else None,
            quantity=line.quantity,
            stock=line.stock,
            available=line.available,
            added_at=line.added_at,
        )


class PriceSummaryResponse(BaseModel):
    subtotal: str
    shipping: str
    total: str
    currency: str

    @classmethod
    def from_breakdown(cls, breakdown):
        return cls(
            subtotal=format_amount(breakdown.subtotal),
            shipping=format_amount(breakdown.shipping),
            total=format_amount(breakdown.total),
            currency=breakdown.currency,
        )


class CartResponse(BaseModel):
    lines: list[CartLineResponse]
    summary: PriceSummaryResponse


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class CheckoutLine(BaseModel):
    product_id: str
    quantity: int


class CheckoutRequest(BaseModel):
    shipping_address: str
    phone_number: str
    notes: str | None = None
    items: list[CheckoutLine] | None = None  # falls back to the server-side cart
    total: str | None = None  # informational only, never trusted

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": "12 Nile St, Cairo",
                    "phone_number": "+20 100 123 4567",
                    "items": [{"product_id": "prod-001", "quantity": 2}],
                }
            ]
        }
    }


class OrderIdResponse(BaseModel):
    order_id: str


class OrderLineResponse(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


class OrderResponse(BaseModel):
    order_id: str
    customer_id: str
    status: str
    payment_status: str
    shipping_address: str
    phone_number: str | None
    notes: str | None
    subtotal: str
    shipping: str
    total: str
    currency: str
    items: list[OrderLineResponse]
    cancelled_by: str | None = None
    cancelled_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order):
        return cls(
            order_id=str(order.id),
            customer_id=str(order.customer_id),
            status=order.status,
            payment_status=order.payment_status,
            shipping_address=order.shipping_address,
            phone_number=order.contact_phone.number if order.contact_phone else None,
            notes=order.notes,
            subtotal=format_amount(order.pricing.subtotal),
            shipping=format_amount(order.pricing.shipping),
            total=format_amount(order.pricing.total),
            currency=order.pricing.currency,
            items=[
                OrderLineResponse(
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=format_amount(item.unit_price),
                    line_total=format_amount(item.line_total),
                )
                for item in order.items
            ],
            cancelled_by=str(order.cancelled_by) if order.cancelled_by else None,
            cancelled_at=order.cancelled_at,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderSummaryResponse(BaseModel):
    order_id: str
    customer_id: str
    status: str
    payment_status: str
    item_count: int
    total: str
    currency: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_summary(cls, summary):
        return cls(
            order_id=str(summary.order_id),
            customer_id=str(summary.customer_id),
            status=summary.status,
            payment_status=summary.payment_status,
            item_count=summary.item_count or 0,
            total=format_amount(from_cents(summary.total_cents or 0)),
            currency=summary.currency,
            created_at=summary.created_at,
            updated_at=summary.updated_at,
        )


class SetOrderStatusRequest(BaseModel):
    status: str
    payment_status: str | None = None


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class ProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    category: str | None = None
    price: str
    stock: int = 0


class ProductIdResponse(BaseModel):
    product_id: str


class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str | None
    category: str | None
    price: str
    stock: int
    is_active: bool

    @classmethod
    def from_product(cls, product):
        return cls(
            product_id=str(product.id),
            name=product.name,
            description=product.description,
            category=product.category,
            price=format_amount(product.price),
            stock=product.stock,
            is_active=product.is_active,
        )


class StatusResponse(BaseModel):
    status: str = "ok"


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
class SubmitReviewRequest(BaseModel):
    product_id: str
    rating: int
    comment: str | None = None


class ReviewIdResponse(BaseModel):
    review_id: str


class ReviewResponse(BaseModel):
    review_id: str
    product_id: str
    customer_id: str
    rating: int
    comment: str | None
    verified_purchase: bool
    created_at: datetime | None = None

    @classmethod
    def from_review(cls, review):
        return cls(
            review_id=str(review.id),
            product_id=str(review.product_id),
            customer_id=str(review.customer_id),
            rating=review.rating.score,
            comment=review.comment,
            verified_purchase=bool(review.verified_purchase),
            created_at=review.created_at,
        )


class ProductReviewsResponse(BaseModel):
    reviews: list[ReviewResponse]
    average_rating: float
    total_reviews: int
