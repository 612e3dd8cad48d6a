import uuid
from sqlalchemy import JSON, UUID, Boolean, Column, DateTime, Enum, Index, Integer, String, Text, func
from app.core.database import Base
from app.models.common import TestimonyCategory, TestimonyStatus, utcnow


class Testimony(Base):
    __tablename__ = "testimonies"

    id = Column(UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4)
    title = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
    author_name = Column(String(50), nullable=False)
    author_email = Column(String, nullable=False, index=True)
    author_location = Column(String(50), nullable=True)
    category = Column(Enum(TestimonyCategory), nullable=False, default=TestimonyCategory.AUTRE)
    status = Column(Enum(TestimonyStatus), nullable=False, default=TestimonyStatus.PENDING)
    scheduled_date = Column(DateTime(timezone=True), nullable=True)
    images = Column(JSON, nullable=False, default=list)
    is_featured = Column(Boolean, nullable=False, default=False)
    likes = Column(Integer, nullable=False, default=0, server_default="0")

    # Moderation stamps, set once on approval
    approved_by = Column(String, nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    __table_args__ = (
        Index("ix_testimonies_status_scheduled", "status", "scheduled_date"),
        Index("ix_testimonies_category_status", "category", "status"),
        Index("ix_testimonies_author_created", "author_email", "created_at"),
    )

    def __repr__(self):
        return f"<Testimony {self.title}>"
