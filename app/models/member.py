import uuid
from datetime import date
from sqlalchemy import JSON, UUID, Boolean, Column, Date, DateTime, Enum, String, Text, func
from app.core.database import Base
from app.models.common import MemberRole, MembershipStatus, utcnow


class Member(Base):
    __tablename__ = "members"

    id = Column(UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String(100), nullable=False, index=True)
    phone = Column(String, nullable=True)
    address = Column(String(255), nullable=True)
    membership_status = Column(Enum(MembershipStatus), nullable=False, default=MembershipStatus.PENDING, index=True)
    role = Column(Enum(MemberRole), nullable=False, default=MemberRole.MEMBER, index=True)
    date_of_birth = Column(Date, nullable=True)
    baptism_date = Column(Date, nullable=True)
    join_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # {"name": ..., "phone": ..., "relationship": ...}
    emergency_contact = Column(JSON, nullable=True)
    spiritual_gifts = Column(JSON, nullable=False, default=list)
    ministries = Column(JSON, nullable=False, default=list)

    notes = Column(Text, nullable=True)
    avatar_url = Column(String, nullable=True)
    is_email_verified = Column(Boolean, nullable=False, default=False)
    last_activity = Column(DateTime(timezone=True), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    @property
    def age(self):
        if not self.date_of_birth:
            return None
        today = date.today()
        born = self.date_of_birth
        return today.year - born.year - ((today.month, today.day) < (born.month, born.day))

    def __repr__(self):
        return f"<Member {self.email}>"
