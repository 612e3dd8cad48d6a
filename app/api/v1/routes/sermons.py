from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Query, status

from app.api.deps import CurrentPrincipal, SessionDep
from app.schemas.common import APIResponse, parse_tags
from app.schemas.sermon import SermonCreate, SermonRead, SermonUpdate
from app.services.sermon import SermonService

router = APIRouter()


@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def create_sermon(
    *,
    session: SessionDep,
    current_user: CurrentPrincipal,
    sermon_in: SermonCreate,
) -> Any:
    """
    Create a sermon owned by the calling user.
    """
    sermon = SermonService(session).create_sermon(sermon_in, current_user)
    return APIResponse(message="Sermon created successfully", data=SermonRead.model_validate(sermon))


@router.get("", response_model=APIResponse)
async def read_sermons(
    *,
    session: SessionDep,
    current_user: CurrentPrincipal,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> Any:
    """
    List sermons, most recent sermon date first.
    """
    sermons, pagination = SermonService(session).list(page, limit)
    return APIResponse(
        data=[SermonRead.model_validate(sermon) for sermon in sermons],
        pagination=pagination,
    )


@router.get("/search", response_model=APIResponse)
async def search_sermons(
    *,
    session: SessionDep,
    current_user: CurrentPrincipal,
    query: Optional[str] = None,
    pastor: Optional[str] = None,
    series: Optional[str] = None,
    tags: Optional[str] = Query(None, description="Comma separated, any of"),
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> Any:
    """
    Search sermons by free text over title, description and transcript,
    partial pastor / series match, tags and sermon date range.
    """
    sermons = SermonService(session).search(
        query=query,
        pastor=pastor,
        series=series,
        tags=parse_tags(tags) if tags else None,
        start_date=start_date,
        end_date=end_date,
    )
    return APIResponse(
        message=f"{len(sermons)} sermon(s) found",
        data=[SermonRead.model_validate(sermon) for sermon in sermons],
    )


@router.get("/{sermon_id}", response_model=APIResponse)
async def read_sermon(*, session: SessionDep, current_user: CurrentPrincipal, sermon_id: str) -> Any:
    sermon = SermonService(session).get_or_404(sermon_id)
    return APIResponse(data=SermonRead.model_validate(sermon))


@router.put("/{sermon_id}", response_model=APIResponse)
async def update_sermon(
    *,
    session: SessionDep,
    current_user: CurrentPrincipal,
    sermon_id: str,
    sermon_in: SermonUpdate,
) -> Any:
    """
    Update a sermon. Only its creator or an admin may do so.
    """
    service = SermonService(session)
    sermon = service.get_or_404(sermon_id)
    sermon = service.update_sermon(sermon, sermon_in, current_user)
    return APIResponse(message="Sermon updated successfully", data=SermonRead.model_validate(sermon))


@router.delete("/{sermon_id}", response_model=APIResponse)
async def delete_sermon(*, session: SessionDep, current_user: CurrentPrincipal, sermon_id: str) -> Any:
    service = SermonService(session)
    sermon = service.get_or_404(sermon_id)
    service.delete_sermon(sermon, current_user)
    return APIResponse(message="Sermon deleted successfully")
