"""Response error extraction for load test observability.

Parses Storefront API error responses into human-readable messages.
Handles two response shapes:

- Pydantic validation (422): {"detail": [{"loc": [...], "msg": "...", "type": "..."}]}
- Domain errors (400/403/404/409/500): {"error": {"field": ["msg", ...]}}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if "detail" in body and isinstance(body["detail"], list):
        parts = []
        for err in body["detail"]:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)

    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            return " | ".join(
                f"{k}: {'; '.join(v) if isinstance(v, list) else v}" for k, v in error.items()
            )
        return str(error)

    return str(body)[:300]


def is_insufficient_stock(response: Response) -> bool:
    """True for the 400 a checkout gets when it lost the race for stock."""
    if response.status_code != 400:
        return False
    try:
        return "quantity" in response.json().get("error", {})
    except (ValueError, AttributeError):
        return False
