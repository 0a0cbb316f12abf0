"""Repository for the articles container (partitioned by /id)."""

from __future__ import annotations

from article_review.database.repositories.base import BaseRepository
from article_review.models.article import Article


class ArticleRepository(BaseRepository[Article]):
    """Provide data access for live articles."""

    container_name = "articles"
    model_class = Article

    async def list_all(self, user_id: str | None = None) -> list[Article]:
        """Fetch articles newest first, optionally only those owned by ``user_id``."""
        if user_id is None:
            return await self.query("SELECT * FROM c ORDER BY c.created_at DESC")
        return await self.query(
            "SELECT * FROM c WHERE c.user.id = @user_id ORDER BY c.created_at DESC",
            [{"name": "@user_id", "value": user_id}],
        )
