"""Ownership checks for articles and revisions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from article_review.errors import AuthorizationError

if TYPE_CHECKING:
    from article_review.models.article import ArticleState, UserRef


def authorize(entity: ArticleState, user: UserRef) -> bool:
    """Return True when ``user`` owns ``entity`` (an article or a revision)."""
    return entity.user.id == user.id


def require_owner(entity: ArticleState, user: UserRef) -> None:
    """Raise ``AuthorizationError`` unless ``user`` owns ``entity``."""
    if not authorize(entity, user):
        raise AuthorizationError("User is not authorized")
