"""Repository for the revisions container (partitioned by /article_id)."""

from __future__ import annotations

from article_review.database.repositories.base import BaseRepository
from article_review.models.revision import ArticleRevision


class RevisionRepository(BaseRepository[ArticleRevision]):
    """Append-only archive of prior article states."""

    container_name = "revisions"
    model_class = ArticleRevision

    async def list_by_article(self, article_id: str) -> list[ArticleRevision]:
        """Fetch all revisions of an article, most recently archived first."""
        return await self.query(
            "SELECT * FROM c WHERE c.article_id = @article_id"
            " ORDER BY c.created_at DESC",
            [{"name": "@article_id", "value": article_id}],
        )

    async def find(self, revision_id: str) -> ArticleRevision | None:
        """Look a revision up by id alone (cross-partition)."""
        results = await self.query(
            "SELECT * FROM c WHERE c.id = @id",
            [{"name": "@id", "value": revision_id}],
        )
        return results[0] if results else None
