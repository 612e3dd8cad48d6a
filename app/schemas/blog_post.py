from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from app.models.common import BlogPostStatus
from app.schemas.common import TagList, UrlStr

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class BlogPostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., pattern=SLUG_PATTERN)
    content: str = Field(..., min_length=100)
    excerpt: Optional[str] = Field(None, max_length=300)
    featured_image: Optional[UrlStr] = None
    status: BlogPostStatus = BlogPostStatus.DRAFT
    tags: TagList = []

    class Config:
        str_strip_whitespace = True


class BlogPostUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, pattern=SLUG_PATTERN)
    content: Optional[str] = Field(None, min_length=100)
    excerpt: Optional[str] = Field(None, max_length=300)
    featured_image: Optional[UrlStr] = None
    status: Optional[BlogPostStatus] = None
    tags: Optional[TagList] = None

    class Config:
        str_strip_whitespace = True


class BlogPostRead(BaseModel):
    id: UUID
    title: str
    slug: str
    content: str
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    status: BlogPostStatus
    tags: list = []
    author: str
    published_at: Optional[datetime] = None
    views: int
    reading_time: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
