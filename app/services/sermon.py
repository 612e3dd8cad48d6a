from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import or_

from app.core.exceptions import PermissionDenied
from app.core.security import Principal, is_owner_or_admin
from app.models.sermon import Sermon
from app.schemas.common import Pagination
from app.schemas.sermon import SermonCreate, SermonUpdate
from app.services.crud import LIKE_ESCAPE, CRUDService, contains_pattern, json_list_contains


class SermonService(CRUDService[Sermon]):
    model = Sermon
    label = "sermon"

    def list(self, page: int, limit: int) -> Tuple[List[Sermon], Pagination]:
        return self.paginate(self.query(), page, limit, [Sermon.sermon_date.desc()])

    def search(
        self,
        query: Optional[str] = None,
        pastor: Optional[str] = None,
        series: Optional[str] = None,
        tags: Optional[List[str]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[Sermon]:
        q = self.query()
        if query:
            pattern = contains_pattern(query)
            q = q.filter(
                or_(
                    Sermon.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Sermon.description.ilike(pattern, escape=LIKE_ESCAPE),
                    Sermon.transcript.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        if pastor:
            q = q.filter(Sermon.pastor_name.ilike(contains_pattern(pastor), escape=LIKE_ESCAPE))
        if series:
            q = q.filter(Sermon.series.ilike(contains_pattern(series), escape=LIKE_ESCAPE))
        if tags:
            q = q.filter(or_(*[json_list_contains(Sermon.tags, tag) for tag in tags]))
        if start_date:
            q = q.filter(Sermon.sermon_date >= start_date)
        if end_date:
            q = q.filter(Sermon.sermon_date <= end_date)
        return q.order_by(Sermon.sermon_date.desc()).all()

    def create_sermon(self, payload: SermonCreate, principal: Principal) -> Sermon:
        data = payload.model_dump()
        data["created_by"] = principal.email
        return self.create(data)

    def update_sermon(self, sermon: Sermon, payload: SermonUpdate, principal: Principal) -> Sermon:
        if not is_owner_or_admin(sermon.created_by, principal):
            raise PermissionDenied("You are not allowed to modify this sermon")
        data: Dict[str, Any] = payload.model_dump(exclude_unset=True)
        for field in ("title", "pastor_name", "sermon_date", "tags"):
            if field in data and data[field] is None:
                data.pop(field)
        return self.update(sermon, data)

    def delete_sermon(self, sermon: Sermon, principal: Principal) -> None:
        if not is_owner_or_admin(sermon.created_by, principal):
            raise PermissionDenied("You are not allowed to delete this sermon")
        self.delete(sermon)
