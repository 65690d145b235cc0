"""Product review listing with its rating summary."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from protean.utils.globals import current_domain

from storefront.review.review import Review, ReviewStatus


@dataclass(frozen=True)
class ProductReviews:
    reviews: list
    average_rating: Decimal
    total_reviews: int


def average_rating(scores) -> Decimal:
    """Mean star rating rounded half-up to one decimal place; 0 when unrated."""
    scores = list(scores)
    if not scores:
        return Decimal("0.0")
    mean = Decimal(sum(scores)) / Decimal(len(scores))
    return mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def product_reviews(product_id) -> ProductReviews:
    """Live reviews for a product, newest first."""
    repo = current_domain.repository_for(Review)
    reviews = (
        repo._dao.query.filter(product_id=str(product_id), status=ReviewStatus.PUBLISHED.value)
        .order_by("-created_at")
        .limit(None)
        .all()
        .items
    )
    return ProductReviews(
        reviews=reviews,
        average_rating=average_rating(r.rating.score for r in reviews),
        total_reviews=len(reviews),
    )
