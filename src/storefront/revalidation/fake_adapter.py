"""Recording invalidator for tests."""

from storefront.revalidation.port import ViewInvalidator


class RecordingInvalidator(ViewInvalidator):
    def __init__(self) -> None:
        self.calls: list[dict] = []

    def invalidate(self, paths: list[str], reason: str, customer_id: str | None = None) -> None:
        self.calls.append({"paths": list(paths), "reason": reason, "customer_id": customer_id})

    def paths(self) -> set[str]:
        return {path for call in self.calls for path in call["paths"]}
