"""Tests for the Cosmos DB repositories."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from azure.core import MatchConditions
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from article_review.database.repositories.articles import ArticleRepository
from article_review.database.repositories.revisions import RevisionRepository
from article_review.database.repositories.users import UserRepository
from tests.factories import make_article, make_revision

_STORED = {
    "id": "art-1",
    "user": {"id": "user-1", "display_name": "Ada"},
    "topic_id": "topic-1",
    "title": "Draft",
    "version": 2,
    "created_at": "2026-01-01T00:00:00+00:00",
    "_etag": "etag-2",
    "_rid": "abc",
    "_ts": 1767225600,
}


async def _aiter(items: list[dict]):
    for item in items:
        yield item


class TestBaseRepository:
    """Test the generic CRUD helpers via ArticleRepository."""

    @pytest.fixture
    def repo(self, mock_database: MagicMock) -> ArticleRepository:
        """Create a repo for testing."""
        return ArticleRepository(mock_database)

    def test_uses_named_container(self, mock_database: MagicMock) -> None:
        """Verify each repository binds to its container."""
        ArticleRepository(mock_database)
        RevisionRepository(mock_database)
        UserRepository(mock_database)
        names = [c[0][0] for c in mock_database.get_container_client.call_args_list]
        assert names == ["articles", "revisions", "users"]

    async def test_get_reads_etag(self, repo: ArticleRepository) -> None:
        """Verify point reads keep the store's etag and ignore system keys."""
        repo._container.read_item.return_value = _STORED  # noqa: SLF001

        article = await repo.get("art-1", "art-1")

        assert article is not None
        assert article.etag == "etag-2"
        assert article.version == 2  # noqa: PLR2004
        repo._container.read_item.assert_awaited_once_with(  # noqa: SLF001
            item="art-1", partition_key="art-1"
        )

    async def test_get_returns_none_when_missing(self, repo: ArticleRepository) -> None:
        """Verify a 404 becomes None."""
        repo._container.read_item.side_effect = CosmosResourceNotFoundError(  # noqa: SLF001
            status_code=404, message="Not found"
        )

        assert await repo.get("missing", "missing") is None

    async def test_create_writes_json_body(self, repo: ArticleRepository) -> None:
        """Verify the body is JSON-ready and carries no etag."""
        repo._container.create_item.return_value = _STORED  # noqa: SLF001
        article = make_article()

        await repo.create(article)

        body = repo._container.create_item.call_args.kwargs["body"]  # noqa: SLF001
        assert body["id"] == "art-1"
        assert isinstance(body["created_at"], str)
        assert "_etag" not in body
        assert "etag" not in body

    async def test_update_uses_etag_match(self, repo: ArticleRepository) -> None:
        """Verify replaces are conditional on the etag that was read."""
        repo._container.replace_item.return_value = _STORED  # noqa: SLF001

        await repo.update(make_article(etag="etag-1"))

        kwargs = repo._container.replace_item.call_args.kwargs  # noqa: SLF001
        assert kwargs["item"] == "art-1"
        assert kwargs["etag"] == "etag-1"
        assert kwargs["match_condition"] is MatchConditions.IfNotModified

    async def test_update_without_etag_is_unconditional(
        self, repo: ArticleRepository
    ) -> None:
        """Verify documents never read from the store replace unconditionally."""
        repo._container.replace_item.return_value = _STORED  # noqa: SLF001

        await repo.update(make_article(etag=None))

        kwargs = repo._container.replace_item.call_args.kwargs  # noqa: SLF001
        assert "etag" not in kwargs
        assert "match_condition" not in kwargs

    async def test_delete(self, repo: ArticleRepository) -> None:
        """Verify hard delete by id and partition key."""
        await repo.delete("art-1", "art-1")

        repo._container.delete_item.assert_awaited_once_with(  # noqa: SLF001
            item="art-1", partition_key="art-1"
        )

    async def test_query_validates_items(self, repo: ArticleRepository) -> None:
        """Verify query results are converted to models."""
        repo._container.query_items = MagicMock(return_value=_aiter([_STORED]))  # noqa: SLF001

        result = await repo.query("SELECT * FROM c")

        assert len(result) == 1
        assert result[0].id == "art-1"


class TestArticleRepository:
    """Test the Article Repository."""

    @pytest.fixture
    def repo(self, mock_database: MagicMock) -> ArticleRepository:
        """Create a repo for testing."""
        return ArticleRepository(mock_database)

    async def test_list_all_newest_first(self, repo: ArticleRepository) -> None:
        """Verify listing orders by creation time descending."""
        repo.query = AsyncMock(return_value=[])

        await repo.list_all()

        query_str = repo.query.call_args[0][0]
        assert "ORDER BY c.created_at DESC" in query_str
        assert "@user_id" not in query_str

    async def test_list_all_for_user(self, repo: ArticleRepository) -> None:
        """Verify the mine-only filter is parameterized."""
        repo.query = AsyncMock(return_value=[])

        await repo.list_all("user-1")

        query_str, params = repo.query.call_args[0]
        assert "WHERE c.user.id = @user_id" in query_str
        assert "ORDER BY c.created_at DESC" in query_str
        assert params == [{"name": "@user_id", "value": "user-1"}]


class TestRevisionRepository:
    """Test the Revision Repository."""

    @pytest.fixture
    def repo(self, mock_database: MagicMock) -> RevisionRepository:
        """Create a repo for testing."""
        return RevisionRepository(mock_database)

    async def test_list_by_article(self, repo: RevisionRepository) -> None:
        """Verify history is newest archival time first."""
        revisions = [make_revision(id="rev-2"), make_revision(id="rev-1")]
        repo.query = AsyncMock(return_value=revisions)

        result = await repo.list_by_article("art-1")

        assert result == revisions
        query_str = repo.query.call_args[0][0]
        assert "@article_id" in query_str
        assert "ORDER BY c.created_at DESC" in query_str

    async def test_find_returns_first(self, repo: RevisionRepository) -> None:
        """Verify lookup by id returns the single match."""
        revision = make_revision()
        repo.query = AsyncMock(return_value=[revision])

        assert await repo.find("rev-1") == revision

    async def test_find_returns_none_when_empty(self, repo: RevisionRepository) -> None:
        """Verify lookup by id returns None when nothing matches."""
        repo.query = AsyncMock(return_value=[])

        assert await repo.find("rev-missing") is None
