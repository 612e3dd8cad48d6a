import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from fastapi import UploadFile

from app.core.exceptions import ValidationFailed
from app.core.security import Principal
from app.models.common import EventType
from app.models.event import Event
from app.schemas.common import Pagination
from app.schemas.event import EventCreate, EventUpdate
from app.services.crud import CRUDService, validate_payload
from app.services.storage import BlobStore

logger = logging.getLogger(__name__)

UPLOAD_FOLDER = "events"


class EventService(CRUDService[Event]):
    model = Event
    label = "event"

    def __init__(self, session, blob_store: BlobStore):
        super().__init__(session)
        self.blob_store = blob_store

    def list(
        self,
        page: int,
        limit: int,
        event_type: Optional[EventType] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Tuple[List[Event], Pagination]:
        query = self.query()
        if event_type:
            query = query.filter(Event.event_type == event_type)
        if start_date:
            query = query.filter(Event.start_date >= start_date)
        if end_date:
            query = query.filter(Event.start_date <= end_date)
        return self.paginate(query, page, limit, [Event.start_date.asc()])

    async def create_event(self, fields: Dict[str, Any], uploads: Sequence[UploadFile], principal: Principal) -> Event:
        payload = validate_payload(EventCreate, fields)
        data = payload.model_dump()
        data["created_by"] = principal.email
        images = await self.blob_store.save_many(UPLOAD_FOLDER, uploads, prefix="event")
        data["images"] = images
        try:
            event = self.create(data)
        except Exception:
            self.blob_store.delete_many(images)
            raise
        logger.info(f"Event '{event.title}' created with {len(images)} image(s)")
        return event

    async def update_event(self, event_id: Any, fields: Dict[str, Any], uploads: Sequence[UploadFile]) -> Event:
        """
        Validate the form, then apply it to the stored event.

        New images replace the current ones, whose files are removed afterwards.
        Nothing is looked up or written when the form itself is invalid.
        """
        payload = validate_payload(EventUpdate, fields)
        data = payload.model_dump(exclude_unset=True)
        for field in ("title", "event_type", "start_date", "end_date"):
            if field in data and data[field] is None:
                data.pop(field)

        event = self.get_or_404(event_id)
        start = data.get("start_date", event.start_date)
        end = data.get("end_date", event.end_date)
        if _naive(end) < _naive(start):
            raise ValidationFailed(
                errors=[{"field": "end_date", "message": "end_date must not be before start_date"}]
            )

        images = await self.blob_store.save_many(UPLOAD_FOLDER, uploads, prefix="event")
        previous = list(event.images or [])
        if images:
            data["images"] = images
        try:
            event = self.update(event, data)
        except Exception:
            self.blob_store.delete_many(images)
            raise

        if images:
            self.blob_store.delete_many(previous)
        return event

    def delete_event(self, event: Event) -> None:
        images = list(event.images or [])
        self.delete(event)
        self.blob_store.delete_many(images)


def _naive(value: datetime) -> datetime:
    # SQLite hands back naive UTC values
    return value.astimezone(timezone.utc).replace(tzinfo=None) if value.tzinfo else value
