"""Common fields for every Cosmos DB document."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(UTC)


class DocumentBase(BaseModel):
    """Identity, creation time and the store's concurrency token."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    created_at: datetime = Field(default_factory=utcnow)
    # Cosmos system property; read back from the store, never written.
    etag: str | None = Field(default=None, alias="_etag", exclude=True)
