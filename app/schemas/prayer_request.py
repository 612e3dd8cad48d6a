from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from app.models.common import PrayerStatus


class PrayerRequestCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=10)
    requester_name: Optional[str] = None
    status: PrayerStatus = PrayerStatus.ACTIVE
    is_anonymous: bool = False
    is_public: bool = True

    class Config:
        str_strip_whitespace = True


class PrayerRequestUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=10)
    requester_name: Optional[str] = None
    status: Optional[PrayerStatus] = None
    is_anonymous: Optional[bool] = None
    is_public: Optional[bool] = None

    class Config:
        str_strip_whitespace = True


class PrayerRequestRead(BaseModel):
    id: UUID
    title: str
    description: str
    requester_name: Optional[str] = None
    requester_id: str
    status: PrayerStatus
    is_anonymous: bool
    is_public: bool
    prayer_count: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PublicPrayerRequestRead(BaseModel):
    """Public view, the requester identity is never exposed."""
    id: UUID
    title: str
    description: str
    requester_name: Optional[str] = None
    status: PrayerStatus
    is_anonymous: bool
    prayer_count: int
    created_at: datetime

    class Config:
        from_attributes = True
