from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

from app.models.common import TestimonyCategory, TestimonyStatus


class TestimonySubmit(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    content: str = Field(..., min_length=10, max_length=2000)
    author_name: str = Field(..., min_length=1, max_length=50)
    author_email: EmailStr
    author_location: Optional[str] = Field(None, max_length=50)
    category: TestimonyCategory = TestimonyCategory.AUTRE

    class Config:
        str_strip_whitespace = True

    @field_validator("author_email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class TestimonyStatusUpdate(BaseModel):
    status: TestimonyStatus
    scheduled_date: Optional[datetime] = Field(None, validate_default=True)
    is_featured: Optional[bool] = None

    @field_validator("scheduled_date")
    @classmethod
    def require_date_when_scheduled(cls, v: Optional[datetime], info: ValidationInfo) -> Optional[datetime]:
        if info.data.get("status") == TestimonyStatus.SCHEDULED and v is None:
            raise ValueError('scheduled_date is required when status is "scheduled"')
        return v


class TestimonyRead(BaseModel):
    id: UUID
    title: str
    content: str
    author_name: str
    author_email: str
    author_location: Optional[str] = None
    category: TestimonyCategory
    status: TestimonyStatus
    scheduled_date: Optional[datetime] = None
    images: List[str] = []
    is_featured: bool
    likes: int
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PublicTestimonyRead(BaseModel):
    """Public view without the author email and approver."""
    id: UUID
    title: str
    content: str
    author_name: str
    author_location: Optional[str] = None
    category: TestimonyCategory
    images: List[str] = []
    is_featured: bool
    likes: int
    created_at: datetime

    class Config:
        from_attributes = True
