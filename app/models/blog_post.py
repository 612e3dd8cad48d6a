import uuid
from sqlalchemy import JSON, UUID, Column, DateTime, Enum, Integer, String, Text, func
from app.core.database import Base
from app.models.common import BlogPostStatus, utcnow


class BlogPost(Base):
    __tablename__ = "blog_posts"

    id = Column(UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(String(300), nullable=True)
    featured_image = Column(String, nullable=True)
    status = Column(Enum(BlogPostStatus), nullable=False, default=BlogPostStatus.DRAFT, index=True)
    tags = Column(JSON, nullable=False, default=list)
    author = Column(String, nullable=False, index=True)
    published_at = Column(DateTime(timezone=True), nullable=True, index=True)
    views = Column(Integer, nullable=False, default=0, server_default="0")
    reading_time = Column(Integer, nullable=False, default=0, server_default="0")  # minutes

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    def __repr__(self):
        return f"<BlogPost {self.slug}>"
