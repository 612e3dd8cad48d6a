import uuid
from sqlalchemy import JSON, UUID, BigInteger, Boolean, Column, DateTime, Enum, Index, Integer, String, Text, func
from app.core.database import Base
from app.models.common import FileType, ResourceCategory, utcnow


class Resource(Base):
    __tablename__ = "resources"

    id = Column(UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(Enum(ResourceCategory), nullable=False)
    file_type = Column(Enum(FileType), nullable=False)
    file_url = Column(String, nullable=True)
    file_size = Column(BigInteger, nullable=True, default=0)  # bytes
    pages = Column(Integer, nullable=True)
    duration = Column(String, nullable=True)  # HH:MM:SS or MM:SS
    artist = Column(String(100), nullable=True)
    download_count = Column(Integer, nullable=False, default=0, server_default="0")
    is_published = Column(Boolean, nullable=False, default=False)
    published_at = Column(DateTime(timezone=True), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    order = Column(Integer, nullable=False, default=0, server_default="0")

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    __table_args__ = (
        Index("ix_resources_category_published", "category", "is_published"),
        Index("ix_resources_order", "order"),
    )

    def __repr__(self):
        return f"<Resource {self.title}>"
