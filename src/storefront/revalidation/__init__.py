"""View invalidator factory.

Provides get_invalidator() / set_invalidator() to swap implementations:
- LoggingInvalidator by default
- RecordingInvalidator in tests
"""

from storefront.revalidation.log_adapter import LoggingInvalidator
from storefront.revalidation.port import ViewInvalidator

_current_invalidator: ViewInvalidator | None = None


def get_invalidator() -> ViewInvalidator:
    """Return the current invalidator. Defaults to LoggingInvalidator."""
    global _current_invalidator
    if _current_invalidator is None:
        _current_invalidator = LoggingInvalidator()
    return _current_invalidator


def set_invalidator(invalidator: ViewInvalidator) -> None:
    global _current_invalidator
    _current_invalidator = invalidator


def reset_invalidator() -> None:
    global _current_invalidator
    _current_invalidator = None
