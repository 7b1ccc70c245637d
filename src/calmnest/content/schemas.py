"""Response schemas for content catalogue endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field

from calmnest.auth.schemas import CamelModel


class ContentItem(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    category: str
    is_active: bool
    uploaded_by: int
    created_at: datetime


class AudioItem(ContentItem):
    description: str
    audio_url: str
    duration: int
    artist: str | None
    tags: list[str]
    play_count: int


class ReadingItem(ContentItem):
    content: str
    author: str | None
    tags: list[str]
    read_count: int


class YogaItem(ContentItem):
    description: str
    video_url: str | None
    image_url: str | None
    instructions: list[str]
    duration: int | None
    difficulty: str
    benefits: list[str]


class AudioListResponse(CamelModel):
    content: list[AudioItem]
    total_pages: int
    current_page: int
    total: int


class ReadingListResponse(CamelModel):
    content: list[ReadingItem]
    total_pages: int
    current_page: int
    total: int


class YogaListResponse(CamelModel):
    content: list[YogaItem]
    total_pages: int
    current_page: int
    total: int


class ReadingCreateRequest(CamelModel):
    title: str = Field(..., max_length=200)
    content: str
    category: str
    author: str | None = Field(None, max_length=200)
    tags: list[str] = Field(default_factory=list)


class ReadingCreateResponse(CamelModel):
    message: str
    content: ReadingItem
