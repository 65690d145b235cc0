"""SubmitReview — rate and comment on a product.

One live review per customer per product. The review is flagged as a
verified purchase when the VerifiedPurchases view holds a delivered order
line for the same customer and product.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product
from storefront.projections.verified_purchases import has_verified_purchase
from storefront.review.review import Review, ReviewStatus
from storefront.shared.errors import InvalidArgument, NotFound
from storefront.shared.retry import process_with_retry

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Review")
class SubmitReview:
    product_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text()


@storefront.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        if not 1 <= command.rating <= 5:
            raise InvalidArgument("rating", "Rating must be between 1 and 5")

        try:
            current_domain.repository_for(Product).get(command.product_id)
        except ObjectNotFoundError:
            raise NotFound("product", f"Product {command.product_id} not found") from None

        repo = current_domain.repository_for(Review)
        existing = repo._dao.query.filter(
            customer_id=str(command.customer_id),
            product_id=str(command.product_id),
            status=ReviewStatus.PUBLISHED.value,
        ).all()
        if existing.items:
            raise InvalidArgument("review", "You have already reviewed this product")

        review = Review.submit(
            product_id=command.product_id,
            customer_id=command.customer_id,
            rating=command.rating,
            comment=command.comment,
            verified_purchase=has_verified_purchase(command.customer_id, command.product_id),
        )
        repo.add(review)

        logger.info(
            "Review submitted",
            review_id=str(review.id),
            product_id=str(command.product_id),
            verified_purchase=review.verified_purchase,
        )
        return str(review.id)


def submit_review(product_id, customer_id, rating, comment=None) -> str:
    return process_with_retry(
        SubmitReview(product_id=product_id, customer_id=customer_id, rating=rating, comment=comment)
    )
