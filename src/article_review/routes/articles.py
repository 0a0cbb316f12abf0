"""Article routes — create, read, edit, review, history, restore, delete."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, Request, status
from pydantic import BaseModel

from article_review.auth.middleware import acting_user, require_authenticated_user
from article_review.auth.permissions import require_owner
from article_review.database.repositories.articles import ArticleRepository
from article_review.database.repositories.revisions import RevisionRepository
from article_review.database.repositories.users import UserRepository
from article_review.models.article import Article
from article_review.models.revision import ArticleRevision
from article_review.services import articles as article_svc

router = APIRouter(tags=["articles"], dependencies=[Depends(require_authenticated_user)])


class GradeRequest(BaseModel):
    """Body of a review submission."""

    score: float | dict[str, float]
    comment: str = ""


@router.get("/articles")
async def list_articles(
    request: Request,
    scope: Annotated[str | None, Query(alias="filter")] = None,
) -> list[Article]:
    """List articles newest first; ``?filter=my`` restricts to the caller's."""
    user = acting_user(request)
    database = request.app.state.cosmos.database
    return await article_svc.list_articles(
        user,
        ArticleRepository(database),
        UserRepository(database),
        mine_only=scope == "my",
    )


@router.post("/articles", status_code=status.HTTP_201_CREATED)
async def create_article(
    request: Request,
    payload: Annotated[dict[str, Any], Body()],
) -> Article:
    """Create version 1 of an article against ``payload["topic_id"]``."""
    user = acting_user(request)
    database = request.app.state.cosmos.database
    return await article_svc.create_article(
        payload,
        payload.get("topic_id"),
        user,
        ArticleRepository(database),
        UserRepository(database),
    )


@router.get("/articles/{article_id}")
async def read_article(request: Request, article_id: str) -> Article:
    """Return the current version of an article."""
    database = request.app.state.cosmos.database
    return await article_svc.get_article(
        article_id, ArticleRepository(database), UserRepository(database)
    )


@router.put("/articles/{article_id}")
async def update_article(
    request: Request,
    article_id: str,
    patch: Annotated[dict[str, Any], Body()],
) -> Article:
    """Edit an article. Archives the previous version and clears grades."""
    user = acting_user(request)
    database = request.app.state.cosmos.database
    articles_repo = ArticleRepository(database)
    article = await article_svc.get_article(article_id, articles_repo, UserRepository(database))
    require_owner(article, user)
    return await article_svc.update_article(
        article, patch, articles_repo, RevisionRepository(database)
    )


@router.delete("/articles/{article_id}")
async def delete_article(request: Request, article_id: str) -> Article:
    """Hard-delete an article. Its revision history is left in place."""
    user = acting_user(request)
    database = request.app.state.cosmos.database
    articles_repo = ArticleRepository(database)
    article = await article_svc.get_article(article_id, articles_repo, UserRepository(database))
    require_owner(article, user)
    return await article_svc.delete_article(article, articles_repo)


@router.post("/articles/{article_id}/grades")
async def review_article(
    request: Request,
    article_id: str,
    grade: GradeRequest,
) -> Article:
    """Submit the caller's grade for an article."""
    user = acting_user(request)
    database = request.app.state.cosmos.database
    articles_repo = ArticleRepository(database)
    article = await article_svc.get_article(article_id, articles_repo, UserRepository(database))
    return await article_svc.add_grade(
        article, grade.score, user, articles_repo, comment=grade.comment
    )


@router.get("/articles/{article_id}/history")
async def article_history(request: Request, article_id: str) -> list[ArticleRevision]:
    """List archived versions of an article, newest first."""
    database = request.app.state.cosmos.database
    users_repo = UserRepository(database)
    article = await article_svc.get_article(article_id, ArticleRepository(database), users_repo)
    return await article_svc.list_history(article, RevisionRepository(database), users_repo)


@router.get("/revisions/{revision_id}")
async def read_revision(request: Request, revision_id: str) -> ArticleRevision:
    """Return a single archived version."""
    database = request.app.state.cosmos.database
    return await article_svc.get_revision(
        revision_id, RevisionRepository(database), UserRepository(database)
    )


@router.post("/revisions/{revision_id}/restore")
async def restore_revision(request: Request, revision_id: str) -> Article:
    """Make an archived version current again, keeping existing grades."""
    user = acting_user(request)
    database = request.app.state.cosmos.database
    revisions_repo = RevisionRepository(database)
    revision = await article_svc.get_revision(revision_id, revisions_repo, UserRepository(database))
    require_owner(revision, user)
    return await article_svc.restore_revision(
        revision, ArticleRepository(database), revisions_repo
    )
