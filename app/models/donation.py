import uuid
from sqlalchemy import UUID, Boolean, Column, DateTime, Enum, Numeric, String, Text, func
from app.core.database import Base
from app.models.common import (
    Currency, DonationType, PaymentMethod, PaymentStatus, RecurrenceFrequency, utcnow
)


class Donation(Base):
    __tablename__ = "donations"

    id = Column(UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4)
    donor_name = Column(String(100), nullable=True)
    donor_email = Column(String, nullable=True)
    donor_id = Column(String, nullable=True, index=True)
    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    currency = Column(Enum(Currency), nullable=False, default=Currency.USD)
    donation_type = Column(Enum(DonationType), nullable=False, default=DonationType.TITHE, index=True)
    payment_method = Column(Enum(PaymentMethod), nullable=False, default=PaymentMethod.CARD)
    payment_status = Column(Enum(PaymentStatus), nullable=False, default=PaymentStatus.PENDING, index=True)
    payment_id = Column(String, unique=True, nullable=False)
    notes = Column(Text, nullable=True)

    # Recurrence is data only, an external job polls next_recurrence_date
    is_recurring = Column(Boolean, nullable=False, default=False, index=True)
    recurrence_frequency = Column(Enum(RecurrenceFrequency), nullable=True)
    next_recurrence_date = Column(DateTime(timezone=True), nullable=True)
    is_anonymous = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    def __repr__(self):
        return f"<Donation {self.payment_id}>"
