"""Error taxonomy raised by the service layer and rendered by the app."""

from __future__ import annotations

from fastapi import status


class ArticleReviewError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ArticleReviewError):
    """Malformed request: missing topic, duplicate grade, bad field types."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthorizationError(ArticleReviewError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ArticleReviewError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ArticleReviewError):
    """The article changed between read and write."""

    status_code = status.HTTP_409_CONFLICT


class PersistenceError(ArticleReviewError):
    """A store read or write failed."""
