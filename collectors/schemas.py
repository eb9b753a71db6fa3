"""Pydantic models for the Helix JSON payloads we consume."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Pagination(BaseModel):
    cursor: str | None = None


class TwitchGame(BaseModel):
    id: str
    name: str | None = None
    box_art_url: str | None = None


class TwitchStream(BaseModel):
    # Only id and viewer_count matter for aggregation; descriptive fields
    # stay loose so a null title or blank started_at never sinks a page.
    id: str
    user_id: str | None = None
    user_name: str | None = None
    game_id: str | None = None
    type: str | None = None
    title: str | None = None
    viewer_count: int = Field(default=0, ge=0)
    started_at: str | None = None
    language: str | None = None
    thumbnail_url: str | None = None
    tag_ids: list[str] | None = None
    tags: list[str] | None = None


class TwitchResult(BaseModel, Generic[T]):
    """Helix list envelope: ``{"data": [...], "pagination": {"cursor": ...}}``."""

    data: list[T] | None = None
    pagination: Pagination | None = None

    @property
    def items(self) -> list[T]:
        return self.data or []

    @property
    def cursor(self) -> str | None:
        # Helix sends {} on the last page; treat a blank cursor the same way
        if self.pagination is None or not self.pagination.cursor:
            return None
        return self.pagination.cursor
