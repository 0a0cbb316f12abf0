"""Repository for the users container (partitioned by /id)."""

from __future__ import annotations

from article_review.database.repositories.base import BaseRepository
from article_review.models.user import User


class UserRepository(BaseRepository[User]):
    container_name = "users"
    model_class = User
