import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from app.core.exceptions import Conflict, NotFound, PermissionDenied
from app.core.security import Principal, is_owner_or_admin
from app.core.workflow import BLOG_POST_TRANSITIONS, check_transition
from app.models.blog_post import BlogPost
from app.models.common import BlogPostStatus, utcnow
from app.schemas.blog_post import BlogPostCreate, BlogPostUpdate
from app.schemas.common import Pagination
from app.services.crud import CRUDService, json_list_contains

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200


def compute_reading_time(content: Optional[str]) -> int:
    """Minutes needed to read ``content`` at 200 words per minute."""
    if not content:
        return 0
    return math.ceil(len(content.split()) / WORDS_PER_MINUTE)


class BlogPostService(CRUDService[BlogPost]):
    model = BlogPost
    label = "blog post"
    conflict_message = "A blog post with this slug already exists"
    sortable = ("created_at", "published_at", "title", "views")

    def get_by_slug(self, slug: str) -> Optional[BlogPost]:
        return self.query(BlogPost.slug == slug).first()

    def _check_slug_available(self, slug: str, exclude_id=None) -> None:
        query = self.query(BlogPost.slug == slug)
        if exclude_id is not None:
            query = query.filter(BlogPost.id != exclude_id)
        if query.first() is not None:
            raise Conflict(self.conflict_message, errors=[{"field": "slug", "message": "Slug already in use"}])

    def list(
        self,
        page: int,
        limit: int,
        status: Optional[BlogPostStatus] = None,
        author: Optional[str] = None,
        tag: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> Tuple[List[BlogPost], Pagination]:
        query = self.query()
        if status:
            query = query.filter(BlogPost.status == status)
        if author:
            query = query.filter(BlogPost.author == author)
        if tag:
            query = query.filter(json_list_contains(BlogPost.tags, tag))
        return self.paginate(query, page, limit, self.order_by(sort, [BlogPost.created_at.desc()]))

    def list_published(self, page: int, limit: int, tag: Optional[str] = None, sort: Optional[str] = None):
        query = self.query(BlogPost.status == BlogPostStatus.PUBLISHED)
        if tag:
            query = query.filter(json_list_contains(BlogPost.tags, tag))
        return self.paginate(query, page, limit, self.order_by(sort, [BlogPost.published_at.desc()]))

    def create_post(self, payload: BlogPostCreate, principal: Principal) -> BlogPost:
        self._check_slug_available(payload.slug)

        data = payload.model_dump()
        data["author"] = principal.email
        data["reading_time"] = compute_reading_time(payload.content)
        if payload.status == BlogPostStatus.PUBLISHED:
            data["published_at"] = utcnow()

        post = self.create(data)
        logger.info(f"Blog post '{post.slug}' created by {principal.email}")
        return post

    def update_post(self, post: BlogPost, payload: BlogPostUpdate, principal: Principal) -> BlogPost:
        if not is_owner_or_admin(post.author, principal):
            raise PermissionDenied("You are not allowed to modify this blog post")

        data: Dict[str, Any] = payload.model_dump(exclude_unset=True)
        for field in ("title", "slug", "content", "status", "tags"):
            if field in data and data[field] is None:
                data.pop(field)

        if "slug" in data and data["slug"] != post.slug:
            self._check_slug_available(data["slug"], exclude_id=post.id)

        if "content" in data and data["content"] != post.content:
            data["reading_time"] = compute_reading_time(data["content"])

        if "status" in data:
            check_transition(BLOG_POST_TRANSITIONS, post.status, data["status"], "blog post")
            if data["status"] == BlogPostStatus.PUBLISHED and post.published_at is None:
                data["published_at"] = utcnow()

        return self.update(post, data)

    def delete_post(self, post: BlogPost, principal: Principal) -> None:
        if not is_owner_or_admin(post.author, principal):
            raise PermissionDenied("You are not allowed to delete this blog post")
        self.delete(post)

    def read(self, id: Any) -> BlogPost:
        """Fetch by id counting the view."""
        return self.increment(id, "views")

    def read_by_slug(self, slug: str) -> BlogPost:
        post = self.get_by_slug(slug)
        if post is None:
            raise NotFound("Blog post not found")
        return self.increment(post.id, "views")
