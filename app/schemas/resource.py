from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from app.models.common import FileType, ResourceCategory
from app.schemas.common import TagList, UrlStr

DURATION_PATTERN = r"^([0-9]{1,2}:)?[0-9]{1,2}:[0-9]{1,2}$"


class ResourceCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=1000)
    category: ResourceCategory
    file_type: FileType
    file_url: Optional[UrlStr] = None
    file_size: Optional[int] = Field(None, ge=0)
    pages: Optional[int] = Field(None, ge=0)
    duration: Optional[str] = Field(None, pattern=DURATION_PATTERN)
    artist: Optional[str] = Field(None, max_length=100)
    tags: TagList = []
    is_published: bool = False
    order: int = Field(0, ge=0)

    class Config:
        str_strip_whitespace = True


class ResourceUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    category: Optional[ResourceCategory] = None
    file_type: Optional[FileType] = None
    file_url: Optional[UrlStr] = None
    file_size: Optional[int] = Field(None, ge=0)
    pages: Optional[int] = Field(None, ge=0)
    duration: Optional[str] = Field(None, pattern=DURATION_PATTERN)
    artist: Optional[str] = Field(None, max_length=100)
    tags: Optional[TagList] = None
    is_published: Optional[bool] = None
    order: Optional[int] = Field(None, ge=0)

    class Config:
        str_strip_whitespace = True


class ResourceRead(BaseModel):
    id: UUID
    title: str
    description: str
    category: ResourceCategory
    file_type: FileType
    file_url: Optional[str] = None
    file_size: Optional[int] = None
    pages: Optional[int] = None
    duration: Optional[str] = None
    artist: Optional[str] = None
    download_count: int
    is_published: bool
    published_at: Optional[datetime] = None
    tags: list = []
    order: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class FAQRead(BaseModel):
    title: str
    description: str

    class Config:
        from_attributes = True
