"""Article document model — the live state of a submission."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from article_review.models.base import DocumentBase, utcnow


class UserRef(BaseModel):
    """Reference to a user with a denormalized display name."""

    id: str
    display_name: str = ""


class Grade(BaseModel):
    """One reviewer's score on an article."""

    user_id: str
    user_name: str = ""
    score: float | dict[str, float]
    comment: str = ""
    created_at: datetime = Field(default_factory=utcnow)


class ArticleContent(BaseModel):
    """Author-editable fields. Patches may only touch these."""

    title: str = ""
    body: str = ""
    attributes: dict[str, Any] = Field(default_factory=dict)


class ArticleState(ArticleContent):
    """Everything an article carries besides identity and creation time."""

    user: UserRef
    topic_id: str
    version: int = 1
    grades: list[Grade] = Field(default_factory=list)


class Article(DocumentBase, ArticleState):
    """A versioned submission against a topic."""

    def grade_by(self, user_id: str) -> Grade | None:
        """Return the grade left by ``user_id``, if any."""
        return next((g for g in self.grades if g.user_id == user_id), None)


MUTABLE_FIELDS: frozenset[str] = frozenset(ArticleContent.model_fields)
