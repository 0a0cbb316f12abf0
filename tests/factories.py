"""Builders for test documents."""

from __future__ import annotations

from article_review.models.article import Article, Grade, UserRef
from article_review.models.revision import ArticleRevision

OWNER = UserRef(id="user-1", display_name="Ada")
REVIEWER = UserRef(id="user-2", display_name="Grace")


def make_article(**overrides: object) -> Article:
    """Build a persisted-looking article owned by ``OWNER``."""
    fields: dict[str, object] = {
        "id": "art-1",
        "user": OWNER.model_copy(),
        "topic_id": "topic-1",
        "title": "Draft",
        "body": "First body",
        "etag": "etag-1",
    }
    fields.update(overrides)
    return Article(**fields)


def make_revision(**overrides: object) -> ArticleRevision:
    fields: dict[str, object] = {
        "id": "rev-1",
        "article_id": "art-1",
        "user": OWNER.model_copy(),
        "topic_id": "topic-1",
        "title": "Old title",
        "body": "Old body",
        "attributes": {"lang": "en"},
        "version": 1,
    }
    fields.update(overrides)
    return ArticleRevision(**fields)


def make_grade(user: UserRef = REVIEWER, score: float = 4.0) -> Grade:
    return Grade(user_id=user.id, user_name=user.display_name, score=score)
