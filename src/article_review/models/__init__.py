"""Data models for Cosmos DB document types."""

from article_review.models.article import (
    MUTABLE_FIELDS,
    Article,
    ArticleContent,
    ArticleState,
    Grade,
    UserRef,
)
from article_review.models.revision import ArticleRevision
from article_review.models.user import Reservation, User

__all__ = [
    "MUTABLE_FIELDS",
    "Article",
    "ArticleContent",
    "ArticleRevision",
    "ArticleState",
    "Grade",
    "Reservation",
    "User",
    "UserRef",
]
