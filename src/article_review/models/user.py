"""User document model — display names and topic reservations."""

from __future__ import annotations

from pydantic import BaseModel, Field

from article_review.models.base import DocumentBase


class Reservation(BaseModel):
    topic_id: str
    submitted: bool = False


class User(DocumentBase):
    display_name: str = ""
    email: str = ""
    reserved: list[Reservation] = Field(default_factory=list)

    def reservation_for(self, topic_id: str) -> Reservation | None:
        return next((r for r in self.reserved if r.topic_id == topic_id), None)
