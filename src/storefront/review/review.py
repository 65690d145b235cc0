"""Review aggregate (CQRS) — a customer's star rating and comment on a product.

A customer holds at most one live review per product. Removing a review
frees the slot, so the customer may review the product again.

State Machine:
    PUBLISHED → REMOVED
    REMOVED → (terminal)
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.review.events import ReviewRemoved, ReviewSubmitted
from storefront.shared.errors import NotFound


class ReviewStatus(Enum):
    PUBLISHED = "PUBLISHED"
    REMOVED = "REMOVED"


@storefront.value_object(part_of="Review")
class Rating:
    """A star rating from 1 to 5."""

    score = Integer(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and (self.score < 1 or self.score > 5):
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})


@storefront.aggregate
class Review:
    product_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    rating = ValueObject(Rating, required=True)
    comment = Text()
    verified_purchase = Boolean(default=False)
    status = String(choices=ReviewStatus, default=ReviewStatus.PUBLISHED.value)
    removed_by = String(max_length=50)
    created_at = DateTime()
    updated_at = DateTime()

    @property
    def is_live(self):
        return self.status == ReviewStatus.PUBLISHED.value

    def is_authored_by(self, customer_id):
        return str(self.customer_id) == str(customer_id)

    @classmethod
    def submit(cls, product_id, customer_id, rating, comment=None, verified_purchase=False):
        now = datetime.now(UTC)
        review = cls(
            product_id=product_id,
            customer_id=customer_id,
            rating=Rating(score=rating),
            comment=comment or None,
            verified_purchase=verified_purchase,
            status=ReviewStatus.PUBLISHED.value,
            created_at=now,
            updated_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                product_id=str(product_id),
                customer_id=str(customer_id),
                rating=rating,
                verified_purchase=verified_purchase,
                submitted_at=now,
            )
        )
        return review

    def remove(self, removed_by):
        if not self.is_live:
            raise NotFound("review", f"Review {self.id} not found")

        now = datetime.now(UTC)
        self.status = ReviewStatus.REMOVED.value
        self.removed_by = str(removed_by)
        self.updated_at = now
        self.raise_(
            ReviewRemoved(
                review_id=str(self.id),
                product_id=str(self.product_id),
                removed_by=str(removed_by),
                removed_at=now,
            )
        )
