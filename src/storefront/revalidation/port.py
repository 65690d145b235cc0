"""View invalidation port.

Order views (history, detail, admin listing) are cached by whatever renders
them. After an order changes, the paths that show it are reported as stale
through this interface.
"""

from abc import ABC, abstractmethod


class ViewInvalidator(ABC):
    @abstractmethod
    def invalidate(self, paths: list[str], reason: str, customer_id: str | None = None) -> None:
        """Mark ``paths`` as stale. ``reason`` names the triggering event.

        ``customer_id`` scopes the customer-facing paths to that customer's views;
        admin paths are stale for every admin.
        """
        ...
