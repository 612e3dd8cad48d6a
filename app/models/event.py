import uuid
from sqlalchemy import JSON, UUID, Column, DateTime, Enum, Integer, String, Text, func
from app.core.database import Base
from app.models.common import EventType, utcnow


class Event(Base):
    __tablename__ = "events"

    id = Column(UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    event_type = Column(Enum(EventType), nullable=False, default=EventType.SERVICE)
    start_date = Column(DateTime(timezone=True), nullable=False, index=True)
    end_date = Column(DateTime(timezone=True), nullable=False)
    location = Column(String(255), nullable=True)
    max_attendees = Column(Integer, nullable=True)
    created_by = Column(String, nullable=False)

    # Relative blob paths, e.g. /uploads/events/event-1700000000000-123.jpg
    images = Column(JSON, nullable=False, default=list)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    def __repr__(self):
        return f"<Event {self.title}>"
