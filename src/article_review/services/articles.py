"""Article business logic — create, review, restore, lookup, list, delete."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from azure.cosmos.exceptions import CosmosHttpResponseError
from azure.cosmos.http_constants import StatusCodes
from pydantic import ValidationError as PydanticValidationError

from article_review.errors import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from article_review.models.article import Article, Grade
from article_review.services.versioning import mutate, sanitize_patch, validate_content

if TYPE_CHECKING:
    from collections.abc import Mapping

    from article_review.database.repositories.articles import ArticleRepository
    from article_review.database.repositories.revisions import RevisionRepository
    from article_review.database.repositories.users import UserRepository
    from article_review.models.article import UserRef
    from article_review.models.revision import ArticleRevision

logger = logging.getLogger(__name__)


async def create_article(
    fields: Mapping[str, Any],
    topic_id: str | None,
    user: UserRef,
    articles_repo: ArticleRepository,
    users_repo: UserRepository,
) -> Article:
    """Create version 1 of an article for ``topic_id`` owned by ``user``."""
    if not topic_id:
        raise ValidationError(
            "An article must be associated with a topic. Add topic_id to the request body."
        )

    try:
        article = Article(user=user, topic_id=topic_id)
    except PydanticValidationError as exc:
        raise ValidationError("topic_id must be a string") from exc
    content = validate_content(article, sanitize_patch(fields))
    article = article.model_copy(update=content)

    try:
        article = await articles_repo.create(article)
    except CosmosHttpResponseError as exc:
        logger.exception("Failed to create article — topic=%s user=%s", topic_id, user.id)
        raise PersistenceError("Failed to create article") from exc

    logger.info("Article created — article=%s topic=%s user=%s", article.id, topic_id, user.id)
    await _mark_reservation_submitted(user.id, topic_id, users_repo)
    return article


async def _mark_reservation_submitted(
    user_id: str, topic_id: str, users_repo: UserRepository
) -> None:
    """Flag the user's reservation for ``topic_id`` as submitted. Never raises."""
    try:
        account = await users_repo.get(user_id, user_id)
        reservation = account.reservation_for(topic_id) if account else None
        if reservation is None:
            logger.warning("No reservation to mark — user=%s topic=%s", user_id, topic_id)
            return
        if reservation.submitted:
            return
        reservation.submitted = True
        await users_repo.update(account)
    except CosmosHttpResponseError:
        logger.warning(
            "Failed to mark reservation submitted — user=%s topic=%s",
            user_id,
            topic_id,
            exc_info=True,
        )


async def get_article(
    article_id: str,
    articles_repo: ArticleRepository,
    users_repo: UserRepository,
) -> Article:
    """Load an article with its owner's current display name."""
    try:
        article = await articles_repo.get(article_id, article_id)
    except CosmosHttpResponseError as exc:
        raise PersistenceError(f"Failed to load article {article_id}") from exc
    if article is None:
        raise NotFoundError(f"Failed to load article {article_id}")
    await _resolve_owner(article, users_repo)
    return article


async def get_revision(
    revision_id: str,
    revisions_repo: RevisionRepository,
    users_repo: UserRepository,
) -> ArticleRevision:
    """Load an archived revision with its owner's current display name."""
    try:
        revision = await revisions_repo.find(revision_id)
    except CosmosHttpResponseError as exc:
        raise PersistenceError(f"Failed to load revision {revision_id}") from exc
    if revision is None:
        raise NotFoundError(f"Failed to load revision {revision_id}")
    await _resolve_owner(revision, users_repo)
    return revision


async def _resolve_owner(
    document: Article | ArticleRevision, users_repo: UserRepository
) -> None:
    """Refresh the denormalized owner name; keep the stored one on failure."""
    await _resolve_owners([document], users_repo)


async def _resolve_owners(
    documents: list[Article] | list[ArticleRevision], users_repo: UserRepository
) -> None:
    """Refresh owner names on many documents, reading each owner once."""
    names: dict[str, str | None] = {}
    for document in documents:
        user_id = document.user.id
        if user_id not in names:
            try:
                owner = await users_repo.get(user_id, user_id)
            except CosmosHttpResponseError:
                logger.warning("Failed to resolve owner — user=%s", user_id, exc_info=True)
                owner = None
            names[user_id] = owner.display_name if owner is not None else None
        if names[user_id] is not None:
            document.user.display_name = names[user_id]


async def list_articles(
    user: UserRef,
    articles_repo: ArticleRepository,
    users_repo: UserRepository,
    *,
    mine_only: bool = False,
) -> list[Article]:
    """List articles newest first, optionally only the acting user's."""
    try:
        articles = await articles_repo.list_all(user.id if mine_only else None)
    except CosmosHttpResponseError as exc:
        raise PersistenceError("Failed to list articles") from exc
    await _resolve_owners(articles, users_repo)
    return articles


async def list_history(
    article: Article,
    revisions_repo: RevisionRepository,
    users_repo: UserRepository,
) -> list[ArticleRevision]:
    """List an article's revisions, most recently archived first."""
    try:
        revisions = await revisions_repo.list_by_article(article.id)
    except CosmosHttpResponseError as exc:
        raise PersistenceError(f"Failed to load history of article {article.id}") from exc
    await _resolve_owners(revisions, users_repo)
    return revisions


async def update_article(
    article: Article,
    patch: Mapping[str, Any],
    articles_repo: ArticleRepository,
    revisions_repo: RevisionRepository,
) -> Article:
    """Apply an author edit. Existing grades no longer apply and are cleared."""
    return await mutate(
        article,
        patch,
        clear_grades=True,
        articles_repo=articles_repo,
        revisions_repo=revisions_repo,
    )


async def add_grade(
    article: Article,
    score: Any,
    reviewer: UserRef,
    articles_repo: ArticleRepository,
    *,
    comment: str = "",
) -> Article:
    """Append ``reviewer``'s grade. Each user may grade an article once."""
    if article.grade_by(reviewer.id) is not None:
        raise ValidationError("User can give only one grade per article.")

    try:
        grade = Grade(
            user_id=reviewer.id,
            user_name=reviewer.display_name,
            score=score,
            comment=comment,
        )
    except PydanticValidationError as exc:
        raise ValidationError("Invalid grade") from exc

    article.grades.append(grade)
    try:
        saved = await articles_repo.update(article)
    except CosmosHttpResponseError as exc:
        article.grades.pop()
        if exc.status_code == StatusCodes.PRECONDITION_FAILED:
            raise ConflictError("Article was modified concurrently; reload and retry") from exc
        raise PersistenceError("Failed to save grade") from exc

    logger.info("Grade added — article=%s reviewer=%s", article.id, reviewer.id)
    return saved


async def restore_revision(
    revision: ArticleRevision,
    articles_repo: ArticleRepository,
    revisions_repo: RevisionRepository,
) -> Article:
    """Replay an archived revision onto its article as a new version.

    Grades are preserved and the pre-restore state is archived, so a restore
    can itself be undone.
    """
    try:
        article = await articles_repo.get(revision.article_id, revision.article_id)
    except CosmosHttpResponseError as exc:
        raise PersistenceError(f"Failed to load article {revision.article_id}") from exc
    if article is None:
        raise NotFoundError(f"Failed to load article {revision.article_id}")

    restored = await mutate(
        article,
        revision.model_dump(),
        clear_grades=False,
        articles_repo=articles_repo,
        revisions_repo=revisions_repo,
    )
    logger.info(
        "Revision restored — article=%s revision=%s version=%d",
        article.id,
        revision.id,
        restored.version,
    )
    return restored


async def delete_article(article: Article, articles_repo: ArticleRepository) -> Article:
    """Hard-delete an article. Its revisions stay in the archive."""
    try:
        await articles_repo.delete(article.id, article.id)
    except CosmosHttpResponseError as exc:
        raise PersistenceError(f"Failed to delete article {article.id}") from exc
    logger.info("Article deleted — article=%s", article.id)
    return article
