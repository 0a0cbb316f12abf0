"""Version controller — snapshot-then-mutate updates of live articles.

Every accepted mutation archives the pre-mutation state as an
``ArticleRevision``, merges the sanitized patch, bumps ``version`` by one and
optionally clears grades. Snapshot failures abort the mutation. If the
article write fails after the snapshot was stored, the snapshot is removed
again on a best-effort basis.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from azure.cosmos.exceptions import CosmosHttpResponseError
from azure.cosmos.http_constants import StatusCodes
from pydantic import ValidationError as PydanticValidationError

from article_review.errors import ConflictError, PersistenceError, ValidationError
from article_review.models.article import MUTABLE_FIELDS, Article, ArticleContent
from article_review.models.revision import ArticleRevision

if TYPE_CHECKING:
    from collections.abc import Mapping

    from article_review.database.repositories.articles import ArticleRepository
    from article_review.database.repositories.revisions import RevisionRepository

logger = logging.getLogger(__name__)


def sanitize_patch(patch: Mapping[str, Any]) -> dict[str, Any]:
    """Keep only author-editable fields; everything else is dropped silently."""
    dropped = sorted(key for key in patch if key not in MUTABLE_FIELDS)
    if dropped:
        logger.debug("Discarding protected or unknown patch fields: %s", ", ".join(dropped))
    return {key: value for key, value in patch.items() if key in MUTABLE_FIELDS}


def validate_content(article: Article, changes: dict[str, Any]) -> dict[str, Any]:
    """Validate ``changes`` merged over the article's content.

    Returns the changes coerced to their model types.
    """
    current = article.model_dump(include=set(MUTABLE_FIELDS))
    try:
        content = ArticleContent.model_validate({**current, **changes})
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid article fields: {exc.error_count()} error(s)") from exc
    return {key: getattr(content, key) for key in changes}


def snapshot(article: Article) -> ArticleRevision:
    """Build a revision holding the article's current state."""
    state = article.model_dump(exclude={"id", "created_at"})
    return ArticleRevision(article_id=article.id, **state)


async def mutate(
    article: Article,
    patch: Mapping[str, Any],
    *,
    clear_grades: bool,
    articles_repo: ArticleRepository,
    revisions_repo: RevisionRepository,
) -> Article:
    """Archive ``article``, apply ``patch`` and persist the next version."""
    changes = validate_content(article, sanitize_patch(patch))

    revision = snapshot(article)
    try:
        await revisions_repo.create(revision)
    except CosmosHttpResponseError as exc:
        logger.exception("Failed to archive revision — article=%s", article.id)
        raise PersistenceError("Failed to archive the current version") from exc

    updated = article.model_copy(
        update={
            **changes,
            "version": article.version + 1,
            "grades": [] if clear_grades else list(article.grades),
        },
        deep=True,
    )

    try:
        saved = await articles_repo.update(updated)
    except CosmosHttpResponseError as exc:
        await _discard_revision(revision, revisions_repo)
        if exc.status_code == StatusCodes.PRECONDITION_FAILED:
            raise ConflictError("Article was modified concurrently; reload and retry") from exc
        logger.exception("Failed to save article — article=%s", article.id)
        raise PersistenceError("Failed to save article") from exc

    logger.info(
        "Article mutated — article=%s version=%d->%d revision=%s clear_grades=%s",
        article.id,
        article.version,
        saved.version,
        revision.id,
        clear_grades,
    )
    return saved


async def _discard_revision(
    revision: ArticleRevision, revisions_repo: RevisionRepository
) -> None:
    """Remove a snapshot whose mutation never landed."""
    try:
        await revisions_repo.delete(revision.id, revision.article_id)
    except CosmosHttpResponseError:
        logger.warning(
            "Orphan revision left behind — revision=%s article=%s",
            revision.id,
            revision.article_id,
            exc_info=True,
        )
