"""Repository modules for each Cosmos DB container."""

from article_review.database.repositories.articles import ArticleRepository
from article_review.database.repositories.revisions import RevisionRepository
from article_review.database.repositories.users import UserRepository

__all__ = [
    "ArticleRepository",
    "RevisionRepository",
    "UserRepository",
]
