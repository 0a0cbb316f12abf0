"""Revision document model — immutable snapshots of prior article states."""

from __future__ import annotations

from article_review.models.article import ArticleState
from article_review.models.base import DocumentBase


class ArticleRevision(DocumentBase, ArticleState):
    """The state of an article immediately before a mutation.

    ``created_at`` marks the archival time, not the article's creation.
    """

    article_id: str
