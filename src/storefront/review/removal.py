"""RemoveReview — the author or an admin takes a review down."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.review.review import Review
from storefront.shared.errors import Forbidden, NotFound
from storefront.shared.retry import process_with_retry

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Review")
class RemoveReview:
    review_id = Identifier(required=True)
    requested_by = String(required=True, max_length=255)
    is_admin = Boolean(default=False)


@storefront.command_handler(part_of=Review)
class RemoveReviewHandler:
    @handle(RemoveReview)
    def remove_review(self, command):
        repo = current_domain.repository_for(Review)
        try:
            review = repo.get(command.review_id)
        except ObjectNotFoundError:
            raise NotFound("review", f"Review {command.review_id} not found") from None

        if not command.is_admin and not review.is_authored_by(command.requested_by):
            raise Forbidden("You can only delete your own reviews")

        review.remove(removed_by=command.requested_by)
        repo.add(review)
        logger.info("Review removed", review_id=str(review.id), removed_by=command.requested_by)


def remove_review(review_id, requested_by, is_admin=False) -> None:
    process_with_retry(RemoveReview(review_id=review_id, requested_by=requested_by, is_admin=is_admin))
