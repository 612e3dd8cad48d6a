from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.models.common import (
    Currency, DonationType, PaymentMethod, PaymentStatus, RecurrenceFrequency
)


class DonationCreate(BaseModel):
    donor_name: Optional[str] = Field(None, max_length=100)
    donor_email: Optional[EmailStr] = None
    amount: float = Field(..., gt=0)
    currency: Currency = Currency.USD
    donation_type: DonationType
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    notes: Optional[str] = None
    is_recurring: bool = False
    recurrence_frequency: Optional[RecurrenceFrequency] = None
    is_anonymous: bool = False

    class Config:
        str_strip_whitespace = True


class DonationUpdate(BaseModel):
    donor_name: Optional[str] = Field(None, max_length=100)
    donor_email: Optional[EmailStr] = None
    amount: Optional[float] = Field(None, gt=0)
    donation_type: Optional[DonationType] = None
    payment_method: Optional[PaymentMethod] = None
    payment_status: Optional[PaymentStatus] = None
    notes: Optional[str] = None
    is_recurring: Optional[bool] = None
    recurrence_frequency: Optional[RecurrenceFrequency] = None
    is_anonymous: Optional[bool] = None

    class Config:
        str_strip_whitespace = True

    @field_validator("amount", "donation_type", "payment_method")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class DonationRead(BaseModel):
    id: UUID
    donor_name: Optional[str] = None
    donor_email: Optional[str] = None
    donor_id: Optional[str] = None
    amount: float
    currency: Currency
    donation_type: DonationType
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    payment_id: str
    notes: Optional[str] = None
    is_recurring: bool
    recurrence_frequency: Optional[RecurrenceFrequency] = None
    next_recurrence_date: Optional[datetime] = None
    is_anonymous: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class DonationTypeStats(BaseModel):
    donation_type: DonationType
    total_amount: float
    count: int


class DonationStats(BaseModel):
    total_amount: float = 0
    total_donations: int = 0
    average_amount: float = 0
    max_amount: float = 0
    min_amount: float = 0
    by_type: List[DonationTypeStats] = []
