"""Error taxonomy for the Storefront core.

Each error extends the Protean exception the HTTP layer already knows how to
map, and carries a ``messages`` dict shaped ``{"field": ["message", ...]}``.
"""

from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError


class InvalidArgument(ValidationError):
    """Malformed input. Not retryable without fixing the request."""

    def __init__(self, field, message):
        self.messages = {field: [message]}
        super().__init__(self.messages)


class NotFound(ObjectNotFoundError):
    """A referenced product, order or cart line does not exist."""

    def __init__(self, entity, message):
        self.messages = {entity: [message]}
        super().__init__(self.messages)


class ProductUnavailable(ObjectNotFoundError):
    """A product referenced at checkout no longer exists or was discontinued."""

    def __init__(self, product_ids):
        self.product_ids = sorted(product_ids)
        self.messages = {"items": [f"Products no longer available: {', '.join(self.product_ids)}"]}
        super().__init__(self.messages)


class InsufficientStock(ValidationError):
    """Requested quantity exceeds the product's stock. Retry with less."""

    def __init__(self, product_id, product_name, requested, available):
        self.product_id = str(product_id)
        self.product_name = product_name
        self.requested = requested
        self.available = available
        self.messages = {
            "quantity": [f"Not enough stock for {product_name}: {requested} requested, {available} available"],
        }
        super().__init__(self.messages)


class Forbidden(InvalidOperationError):
    """The caller does not own the resource or lacks the admin role."""

    def __init__(self, message):
        self.messages = {"_entity": [message]}
        super().__init__(self.messages)


class InvalidState(InvalidOperationError):
    """The order's current status does not allow the requested transition."""

    def __init__(self, current_status, message=None):
        self.current_status = current_status
        self.messages = {"status": [message or f"Cannot cancel order with status: {current_status}"]}
        super().__init__(self.messages)


class Conflict(InvalidOperationError):
    """A concurrent writer won the race. Safe to retry."""

    def __init__(self, message):
        self.messages = {"_entity": [message]}
        super().__init__(self.messages)


class Internal(Exception):
    """Storage or transport failure. Nothing was partially applied."""

    def __init__(self, message):
        self.messages = {"_entity": [message]}
        super().__init__(message)
