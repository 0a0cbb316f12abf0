"""Generic repository over a single Cosmos DB container."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar, cast

from azure.core import MatchConditions
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from article_review.models.base import DocumentBase

if TYPE_CHECKING:
    from azure.cosmos.aio import ContainerProxy, DatabaseProxy

T = TypeVar("T", bound=DocumentBase)


class BaseRepository(Generic[T]):
    """CRUD and query helpers shared by every container repository."""

    container_name: ClassVar[str]
    model_class: type[T]

    def __init__(self, database: DatabaseProxy) -> None:
        self._container: ContainerProxy = database.get_container_client(
            self.container_name
        )

    def _to_model(self, data: dict[str, Any]) -> T:
        return self.model_class.model_validate(data)

    @staticmethod
    def _to_body(document: DocumentBase) -> dict[str, Any]:
        return document.model_dump(mode="json", exclude_none=True)

    async def create(self, document: T) -> T:
        """Insert a new document and return it as stored."""
        data = await self._container.create_item(body=self._to_body(document))
        return self._to_model(cast("dict[str, Any]", data))

    async def get(self, item_id: str, partition_key: str) -> T | None:
        """Point-read a document, returning None when it does not exist."""
        try:
            data = await self._container.read_item(item=item_id, partition_key=partition_key)
        except CosmosResourceNotFoundError:
            return None
        return self._to_model(cast("dict[str, Any]", data))

    async def update(self, document: T) -> T:
        """Replace a document, guarded by its etag when one was read.

        Raises ``CosmosHttpResponseError`` (412) when another writer changed
        the document since it was read.
        """
        kwargs: dict[str, Any] = {}
        if document.etag is not None:
            kwargs = {"etag": document.etag, "match_condition": MatchConditions.IfNotModified}
        data = await self._container.replace_item(
            item=document.id, body=self._to_body(document), **kwargs
        )
        return self._to_model(cast("dict[str, Any]", data))

    async def delete(self, item_id: str, partition_key: str) -> None:
        """Hard-delete a document."""
        await self._container.delete_item(item=item_id, partition_key=partition_key)

    async def query(
        self,
        query: str,
        parameters: list[dict[str, Any]] | None = None,
    ) -> list[T]:
        """Run a SQL query and validate each result into the model class."""
        items = self._container.query_items(query=query, parameters=parameters or [])
        return [self._to_model(item) async for item in items]
