import logging
from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Query, Request, status

from app.api.deps import BlobStoreDep, CurrentPrincipal, SessionDep, read_image_form
from app.core.config import settings
from app.models.common import EventType
from app.schemas.common import APIResponse
from app.schemas.event import EventRead
from app.services.event import EventService

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    *,
    request: Request,
    session: SessionDep,
    blob_store: BlobStoreDep,
    current_user: CurrentPrincipal,
) -> Any:
    """
    Create an event from a multipart form.

    Text fields carry the event data, up to 10 files may be sent under
    ``images``. Stored images are removed again if the event cannot be saved.
    """
    fields, uploads = await read_image_form(request, settings.MAX_EVENT_IMAGES)
    event = await EventService(session, blob_store).create_event(fields, uploads, current_user)
    return APIResponse(message="Event created successfully", data=EventRead.model_validate(event))


@router.get("", response_model=APIResponse)
async def read_events(
    *,
    session: SessionDep,
    blob_store: BlobStoreDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    event_type: Optional[EventType] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> Any:
    """
    List events ordered by start date.
    """
    events, pagination = EventService(session, blob_store).list(
        page, limit, event_type=event_type, start_date=start_date, end_date=end_date
    )
    return APIResponse(
        data=[EventRead.model_validate(event) for event in events],
        pagination=pagination,
    )


@router.get("/{event_id}", response_model=APIResponse)
async def read_event(*, session: SessionDep, blob_store: BlobStoreDep, event_id: str) -> Any:
    event = EventService(session, blob_store).get_or_404(event_id)
    return APIResponse(data=EventRead.model_validate(event))


@router.put("/{event_id}", response_model=APIResponse)
async def update_event(
    *,
    request: Request,
    session: SessionDep,
    blob_store: BlobStoreDep,
    current_user: CurrentPrincipal,
    event_id: str,
) -> Any:
    """
    Update an event. New images replace the existing ones.
    """
    fields, uploads = await read_image_form(request, settings.MAX_EVENT_IMAGES)
    event = await EventService(session, blob_store).update_event(event_id, fields, uploads)
    logger.info(f"Event {event.id} updated by {current_user.email}")
    return APIResponse(message="Event updated successfully", data=EventRead.model_validate(event))


@router.delete("/{event_id}", response_model=APIResponse)
async def delete_event(
    *,
    session: SessionDep,
    blob_store: BlobStoreDep,
    current_user: CurrentPrincipal,
    event_id: str,
) -> Any:
    service = EventService(session, blob_store)
    event = service.get_or_404(event_id)
    service.delete_event(event)
    logger.info(f"Event {event_id} deleted by {current_user.email}")
    return APIResponse(message="Event deleted successfully")
