from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, Field, model_validator

from app.models.common import EventType


class EventBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    event_type: EventType = EventType.SERVICE
    start_date: datetime
    end_date: datetime
    location: Optional[str] = Field(None, max_length=255)
    max_attendees: Optional[int] = Field(None, ge=1)

    class Config:
        str_strip_whitespace = True


class EventCreate(EventBase):
    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    event_type: Optional[EventType] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = Field(None, max_length=255)
    max_attendees: Optional[int] = Field(None, ge=1)

    class Config:
        str_strip_whitespace = True


class EventRead(EventBase):
    id: UUID
    created_by: str
    images: List[str] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
