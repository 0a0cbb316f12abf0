"""Authentication and ownership checks."""

from article_review.auth.middleware import acting_user, require_authenticated_user
from article_review.auth.permissions import authorize, require_owner

__all__ = ["acting_user", "authorize", "require_authenticated_user", "require_owner"]
