import re
from datetime import date, datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.models.common import MemberRole, MembershipStatus
from app.schemas.common import TagList, UrlStr

PHONE_PATTERN = r"^\+?[1-9]\d{0,15}$"


def check_phone_number(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    compact = re.sub(r"[\s\-()]", "", v)
    if not re.match(PHONE_PATTERN, compact):
        raise ValueError("Invalid phone number")
    return v


class EmergencyContact(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    relationship: Optional[str] = None

    class Config:
        str_strip_whitespace = True


class MemberCreate(BaseModel):
    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = None
    address: Optional[str] = Field(None, max_length=255)
    membership_status: MembershipStatus = MembershipStatus.PENDING
    role: MemberRole = MemberRole.MEMBER
    date_of_birth: Optional[date] = None
    baptism_date: Optional[date] = None
    emergency_contact: Optional[EmergencyContact] = None
    spiritual_gifts: TagList = []
    ministries: TagList = []
    notes: Optional[str] = None
    avatar_url: Optional[UrlStr] = None

    class Config:
        str_strip_whitespace = True

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return check_phone_number(v)


class MemberUpdate(BaseModel):
    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = None
    address: Optional[str] = Field(None, max_length=255)
    membership_status: Optional[MembershipStatus] = None
    role: Optional[MemberRole] = None
    date_of_birth: Optional[date] = None
    baptism_date: Optional[date] = None
    emergency_contact: Optional[EmergencyContact] = None
    spiritual_gifts: Optional[TagList] = None
    ministries: Optional[TagList] = None
    notes: Optional[str] = None
    avatar_url: Optional[UrlStr] = None

    class Config:
        str_strip_whitespace = True

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return check_phone_number(v)


class MemberRead(BaseModel):
    id: UUID
    email: str
    full_name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    membership_status: MembershipStatus
    role: MemberRole
    date_of_birth: Optional[date] = None
    baptism_date: Optional[date] = None
    join_date: Optional[datetime] = None
    emergency_contact: Optional[EmergencyContact] = None
    spiritual_gifts: list = []
    ministries: list = []
    notes: Optional[str] = None
    avatar_url: Optional[str] = None
    is_email_verified: bool
    last_activity: Optional[datetime] = None
    age: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
