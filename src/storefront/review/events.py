"""Domain events for the Review aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Review")
class ReviewSubmitted:
    """A customer reviewed a product."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    rating = Integer(required=True)
    verified_purchase = Boolean(default=False)
    submitted_at = DateTime(required=True)


@storefront.event(part_of="Review")
class ReviewRemoved:
    """The author or an admin took a review down."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    removed_by = String(required=True)
    removed_at = DateTime(required=True)
