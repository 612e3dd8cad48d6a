import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import Integer, String, cast, func, or_

from app.models.common import ResourceCategory, utcnow
from app.models.resource import Resource
from app.schemas.common import Pagination
from app.schemas.resource import ResourceCreate, ResourceUpdate
from app.services.crud import LIKE_ESCAPE, CRUDService, contains_pattern

logger = logging.getLogger(__name__)


class ResourceService(CRUDService[Resource]):
    model = Resource
    label = "resource"

    def _filtered(self, category: Optional[ResourceCategory], search: Optional[str], *criteria):
        query = self.query(*criteria)
        if category:
            query = query.filter(Resource.category == category)
        if search:
            pattern = contains_pattern(search)
            query = query.filter(
                or_(
                    Resource.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Resource.description.ilike(pattern, escape=LIKE_ESCAPE),
                    cast(Resource.tags, String).ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        return query

    def list_published(
        self,
        page: int,
        limit: int,
        category: Optional[ResourceCategory] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Resource], Pagination]:
        query = self._filtered(category, search, Resource.is_published.is_(True))
        return self.paginate(query, page, limit, [Resource.order.asc(), Resource.created_at.desc()])

    def list_all(
        self,
        page: int,
        limit: int,
        category: Optional[ResourceCategory] = None,
        published: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Resource], Pagination]:
        query = self._filtered(category, search)
        if published is not None:
            query = query.filter(Resource.is_published.is_(published))
        return self.paginate(query, page, limit, [Resource.order.asc(), Resource.created_at.desc()])

    def get_published(self, id: Any) -> Resource:
        return self.get_or_404(id, Resource.is_published.is_(True))

    def faqs(self) -> List[Resource]:
        return (
            self.query(Resource.category == ResourceCategory.FAQ, Resource.is_published.is_(True))
            .order_by(Resource.order.asc(), Resource.created_at.desc())
            .all()
        )

    def register_download(self, id: Any) -> Resource:
        return self.increment(id, "download_count", Resource.is_published.is_(True))

    def create_resource(self, payload: ResourceCreate) -> Resource:
        data = payload.model_dump()
        if data["is_published"]:
            data["published_at"] = utcnow()
        resource = self.create(data)
        logger.info(f"Resource '{resource.title}' created ({resource.category.value})")
        return resource

    def update_resource(self, resource: Resource, payload: ResourceUpdate) -> Resource:
        data: Dict[str, Any] = payload.model_dump(exclude_unset=True)
        for field in ("title", "description", "category", "file_type", "is_published", "order", "tags"):
            if field in data and data[field] is None:
                data.pop(field)
        if data.get("is_published") and resource.published_at is None:
            data["published_at"] = utcnow()
        return self.update(resource, data)

    def stats(self) -> Dict[str, Any]:
        rows = (
            self.session.query(
                Resource.category,
                func.count(Resource.id),
                func.sum(cast(Resource.is_published, Integer)),
                func.sum(Resource.download_count),
            )
            .group_by(Resource.category)
            .all()
        )
        by_category = [
            {
                "category": category.value,
                "count": count,
                "published": int(published or 0),
                "downloads": int(downloads or 0),
            }
            for category, count, published, downloads in rows
        ]
        return {
            "by_category": by_category,
            "total": sum(item["count"] for item in by_category),
            "total_downloads": sum(item["downloads"] for item in by_category),
        }
