"""Authentication glue — reads the signed-in user from the session."""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, Request, status

from article_review.models.article import UserRef


def get_user(request: Request) -> dict[str, Any] | None:
    """Extract the authenticated user from the session, if present."""
    return request.session.get("user") if hasattr(request, "session") else None


def require_authenticated_user(request: Request) -> dict[str, Any]:
    """Return the authenticated user or raise HTTP 401."""
    user = get_user(request)
    if not user or not user.get("id"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user


def acting_user(request: Request) -> UserRef:
    """Return the authenticated user as a ``UserRef`` or raise HTTP 401."""
    user = require_authenticated_user(request)
    return UserRef(id=str(user["id"]), display_name=user.get("name", ""))
