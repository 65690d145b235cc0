"""Caller identity supplied by the authentication layer in front of us."""

from dataclasses import dataclass

from fastapi import Header, HTTPException

from storefront.shared.errors import Forbidden
from storefront.utils.logging import add_context


@dataclass(frozen=True)
class UserContext:
    user_id: str
    is_admin: bool = False


async def current_user(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> UserContext:
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Authentication required")
    user = UserContext(
        user_id=x_user_id.strip(),
        is_admin=(x_user_role or "").strip().upper() == "ADMIN",
    )
    add_context(user_id=user.user_id)
    return user


async def admin_user(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> UserContext:
    user = await current_user(x_user_id, x_user_role)
    if not user.is_admin:
        raise Forbidden("Admin role required")
    return user
