from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from app.schemas.common import TagList, UrlStr


class SermonBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    pastor_name: str = Field(..., min_length=1, max_length=100)
    sermon_date: datetime
    scripture_reference: Optional[str] = None
    video_url: Optional[UrlStr] = None
    audio_url: Optional[UrlStr] = None
    transcript: Optional[str] = None
    series: Optional[str] = None
    tags: TagList = []

    class Config:
        str_strip_whitespace = True


class SermonCreate(SermonBase):
    pass


class SermonUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    pastor_name: Optional[str] = Field(None, min_length=1, max_length=100)
    sermon_date: Optional[datetime] = None
    scripture_reference: Optional[str] = None
    video_url: Optional[UrlStr] = None
    audio_url: Optional[UrlStr] = None
    transcript: Optional[str] = None
    series: Optional[str] = None
    tags: Optional[TagList] = None

    class Config:
        str_strip_whitespace = True


class SermonRead(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    pastor_name: str
    sermon_date: datetime
    scripture_reference: Optional[str] = None
    video_url: Optional[str] = None
    audio_url: Optional[str] = None
    transcript: Optional[str] = None
    series: Optional[str] = None
    tags: list = []
    created_by: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
