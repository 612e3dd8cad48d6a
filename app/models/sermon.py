import uuid
from sqlalchemy import JSON, UUID, Column, DateTime, String, Text, func
from app.core.database import Base
from app.models.common import utcnow


class Sermon(Base):
    __tablename__ = "sermons"

    id = Column(UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    pastor_name = Column(String(100), nullable=False, index=True)
    sermon_date = Column(DateTime(timezone=True), nullable=False, index=True)
    scripture_reference = Column(String, nullable=True)
    video_url = Column(String, nullable=True)
    audio_url = Column(String, nullable=True)
    transcript = Column(Text, nullable=True)
    series = Column(String, nullable=True, index=True)
    tags = Column(JSON, nullable=False, default=list)

    # Email of the principal that created the sermon
    created_by = Column(String, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    def __repr__(self):
        return f"<Sermon {self.title}>"
