from typing import Any, Dict, List, Optional, Tuple

from app.core.exceptions import PermissionDenied
from app.core.security import Principal, is_owner_or_admin
from app.models.common import PrayerStatus
from app.models.prayer_request import PrayerRequest
from app.schemas.common import Pagination
from app.schemas.prayer_request import PrayerRequestCreate, PrayerRequestUpdate
from app.services.crud import CRUDService


class PrayerRequestService(CRUDService[PrayerRequest]):
    model = PrayerRequest
    label = "prayer request"

    def list(
        self,
        page: int,
        limit: int,
        status: Optional[PrayerStatus] = None,
        is_public: Optional[bool] = None,
    ) -> Tuple[List[PrayerRequest], Pagination]:
        query = self.query()
        if status:
            query = query.filter(PrayerRequest.status == status)
        if is_public is not None:
            query = query.filter(PrayerRequest.is_public.is_(is_public))
        return self.paginate(query, page, limit, [PrayerRequest.created_at.desc()])

    def list_public(self, page: int, limit: int, status: PrayerStatus = PrayerStatus.ACTIVE):
        query = self.query(PrayerRequest.is_public.is_(True), PrayerRequest.status == status)
        return self.paginate(
            query, page, limit, [PrayerRequest.prayer_count.desc(), PrayerRequest.created_at.desc()]
        )

    def create_request(self, payload: PrayerRequestCreate, principal: Principal) -> PrayerRequest:
        data = payload.model_dump()
        data["requester_id"] = principal.email
        if data["is_anonymous"]:
            data["requester_name"] = None
        return self.create(data)

    def update_request(self, prayer: PrayerRequest, payload: PrayerRequestUpdate, principal: Principal) -> PrayerRequest:
        if not is_owner_or_admin(prayer.requester_id, principal):
            raise PermissionDenied("You are not allowed to modify this prayer request")
        data: Dict[str, Any] = payload.model_dump(exclude_unset=True)
        for field in ("title", "description", "status", "is_anonymous", "is_public"):
            if field in data and data[field] is None:
                data.pop(field)
        if data.get("is_anonymous", prayer.is_anonymous):
            data["requester_name"] = None
        return self.update(prayer, data)

    def delete_request(self, prayer: PrayerRequest, principal: Principal) -> None:
        if not is_owner_or_admin(prayer.requester_id, principal):
            raise PermissionDenied("You are not allowed to delete this prayer request")
        self.delete(prayer)

    def pray(self, id: Any) -> PrayerRequest:
        return self.increment(id, "prayer_count")
