import uuid
from sqlalchemy import UUID, Boolean, Column, DateTime, Enum, Integer, String, Text, func
from app.core.database import Base
from app.models.common import PrayerStatus, utcnow


class PrayerRequest(Base):
    __tablename__ = "prayer_requests"

    id = Column(UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    requester_name = Column(String, nullable=True)
    requester_id = Column(String, nullable=False, index=True)
    status = Column(Enum(PrayerStatus), nullable=False, default=PrayerStatus.ACTIVE, index=True)
    is_anonymous = Column(Boolean, nullable=False, default=False)
    is_public = Column(Boolean, nullable=False, default=True, index=True)
    prayer_count = Column(Integer, nullable=False, default=0, server_default="0")

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    def __repr__(self):
        return f"<PrayerRequest {self.title}>"
