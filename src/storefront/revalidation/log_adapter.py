"""Default invalidator: records the stale paths in the application log."""

import structlog

from storefront.revalidation.port import ViewInvalidator

logger = structlog.get_logger(__name__)


class LoggingInvalidator(ViewInvalidator):
    def invalidate(self, paths: list[str], reason: str, customer_id: str | None = None) -> None:
        logger.info("Order views stale", paths=paths, reason=reason, customer_id=customer_id)
