"""Testimony submission and moderation.

Submissions are public and rate limited per author email. Moderation moves a
testimony through the states declared in ``TESTIMONY_TRANSITIONS``; approval
stamps the approver once.
"""
import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from fastapi import UploadFile
from sqlalchemy import func

from app.core.config import settings
from app.core.exceptions import RateLimited
from app.core.security import Principal
from app.core.workflow import TESTIMONY_TRANSITIONS, check_transition
from app.models.common import TestimonyCategory, TestimonyStatus, utcnow
from app.models.testimony import Testimony
from app.schemas.common import Pagination
from app.schemas.testimony import TestimonyStatusUpdate, TestimonySubmit
from app.services.crud import CRUDService, validate_payload
from app.services.storage import BlobStore

logger = logging.getLogger(__name__)

UPLOAD_FOLDER = "testimonies"


def absolute_image_urls(images: Sequence[str], base_url: str) -> List[str]:
    """Turn stored ``/uploads/...`` paths into absolute URLs for the caller's host."""
    base = base_url.rstrip("/")
    return [f"{base}{image}" if image.startswith("/uploads/") else image for image in images or []]


class TestimonyService(CRUDService[Testimony]):
    model = Testimony
    label = "testimony"

    def __init__(self, session, blob_store: Optional[BlobStore] = None):
        super().__init__(session)
        self.blob_store = blob_store

    def recent_submission_count(self, author_email: str) -> int:
        since = utcnow() - timedelta(hours=settings.TESTIMONY_SUBMISSION_WINDOW_HOURS)
        return (
            self.session.query(func.count(Testimony.id))
            .filter(Testimony.author_email == author_email, Testimony.created_at >= since)
            .scalar()
        )

    async def submit(self, fields: Dict[str, Any], uploads: Sequence[UploadFile]) -> Testimony:
        """
        Store the images, validate, rate limit and persist a pending testimony.

        Any failure after the images were written removes them again.
        """
        images = await self.blob_store.save_many(UPLOAD_FOLDER, uploads, prefix="testimony")
        try:
            payload = validate_payload(TestimonySubmit, fields)
            if self.recent_submission_count(payload.author_email) >= settings.TESTIMONY_SUBMISSION_LIMIT:
                raise RateLimited("Too many testimonies submitted recently. Please try again tomorrow.")

            data = payload.model_dump()
            data["status"] = TestimonyStatus.PENDING
            data["images"] = images
            testimony = self.create(data)
        except Exception:
            self.blob_store.delete_many(images)
            raise

        logger.info(f"Testimony {testimony.id} submitted with {len(images)} image(s)")
        return testimony

    def list_public(
        self,
        page: int,
        limit: int,
        category: Optional[TestimonyCategory] = None,
        featured: Optional[bool] = None,
    ) -> Tuple[List[Testimony], Pagination]:
        query = self.query(Testimony.status == TestimonyStatus.APPROVED)
        if category:
            query = query.filter(Testimony.category == category)
        if featured:
            query = query.filter(Testimony.is_featured.is_(True))
        return self.paginate(query, page, limit, [Testimony.created_at.desc()])

    def list_all(
        self,
        page: int,
        limit: int,
        status: Optional[TestimonyStatus] = None,
        category: Optional[TestimonyCategory] = None,
    ) -> Tuple[List[Testimony], Pagination]:
        query = self.query()
        if status:
            query = query.filter(Testimony.status == status)
        if category:
            query = query.filter(Testimony.category == category)
        return self.paginate(query, page, limit, [Testimony.created_at.desc()])

    def update_status(self, testimony: Testimony, payload: TestimonyStatusUpdate, principal: Principal) -> Testimony:
        current = testimony.status
        target = payload.status
        check_transition(TESTIMONY_TRANSITIONS, current, target, "testimony")

        data: Dict[str, Any] = {"status": target}
        if target == TestimonyStatus.APPROVED and testimony.approved_at is None:
            data["approved_by"] = principal.id
            data["approved_at"] = utcnow()
        if target == TestimonyStatus.SCHEDULED:
            data["scheduled_date"] = payload.scheduled_date
        if payload.is_featured is not None:
            data["is_featured"] = payload.is_featured

        testimony = self.update(testimony, data)
        logger.info(f"Testimony {testimony.id} moved {current.value} -> {target.value} by {principal.id}")
        return testimony

    def delete_testimony(self, testimony: Testimony) -> None:
        images = list(testimony.images or [])
        self.delete(testimony)
        if self.blob_store is not None:
            self.blob_store.delete_many(images)

    def stats(self) -> Dict[str, Any]:
        rows = (
            self.session.query(Testimony.status, func.count(Testimony.id))
            .group_by(Testimony.status)
            .all()
        )
        featured = (
            self.session.query(func.count(Testimony.id))
            .filter(Testimony.is_featured.is_(True), Testimony.status == TestimonyStatus.APPROVED)
            .scalar()
        )
        return {
            "by_status": [{"status": status.value, "count": count} for status, count in rows],
            "total": sum(count for _, count in rows),
            "featured": featured,
        }
