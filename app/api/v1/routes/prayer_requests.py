from typing import Any, Optional

from fastapi import APIRouter, Query, status

from app.api.deps import CurrentPrincipal, SessionDep
from app.models.common import PrayerStatus
from app.schemas.common import APIResponse
from app.schemas.prayer_request import (
    PrayerRequestCreate,
    PrayerRequestRead,
    PrayerRequestUpdate,
    PublicPrayerRequestRead,
)
from app.services.prayer_request import PrayerRequestService

router = APIRouter()


# Public routes
@router.get("/public", response_model=APIResponse)
async def read_public_prayer_requests(
    *,
    session: SessionDep,
    status: PrayerStatus = PrayerStatus.ACTIVE,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> Any:
    """
    Public prayer wall, most prayed for first.
    """
    prayers, pagination = PrayerRequestService(session).list_public(page, limit, status=status)
    return APIResponse(
        data=[PublicPrayerRequestRead.model_validate(prayer) for prayer in prayers],
        pagination=pagination,
    )


@router.patch("/{prayer_id}/pray", response_model=APIResponse)
async def pray_for_request(*, session: SessionDep, prayer_id: str) -> Any:
    """
    Count one more prayer. Safe under concurrent calls.
    """
    prayer = PrayerRequestService(session).pray(prayer_id)
    return APIResponse(
        message="Prayer counted",
        data={"id": prayer.id, "prayer_count": prayer.prayer_count},
    )


# Authenticated routes
@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def create_prayer_request(
    *,
    session: SessionDep,
    current_user: CurrentPrincipal,
    prayer_in: PrayerRequestCreate,
) -> Any:
    prayer = PrayerRequestService(session).create_request(prayer_in, current_user)
    return APIResponse(
        message="Prayer request created successfully",
        data=PrayerRequestRead.model_validate(prayer),
    )


@router.get("", response_model=APIResponse)
async def read_prayer_requests(
    *,
    session: SessionDep,
    current_user: CurrentPrincipal,
    status: Optional[PrayerStatus] = None,
    is_public: Optional[bool] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> Any:
    prayers, pagination = PrayerRequestService(session).list(page, limit, status=status, is_public=is_public)
    return APIResponse(
        data=[PrayerRequestRead.model_validate(prayer) for prayer in prayers],
        pagination=pagination,
    )


@router.get("/{prayer_id}", response_model=APIResponse)
async def read_prayer_request(*, session: SessionDep, current_user: CurrentPrincipal, prayer_id: str) -> Any:
    prayer = PrayerRequestService(session).get_or_404(prayer_id)
    return APIResponse(data=PrayerRequestRead.model_validate(prayer))


@router.put("/{prayer_id}", response_model=APIResponse)
async def update_prayer_request(
    *,
    session: SessionDep,
    current_user: CurrentPrincipal,
    prayer_id: str,
    prayer_in: PrayerRequestUpdate,
) -> Any:
    service = PrayerRequestService(session)
    prayer = service.get_or_404(prayer_id)
    prayer = service.update_request(prayer, prayer_in, current_user)
    return APIResponse(
        message="Prayer request updated successfully",
        data=PrayerRequestRead.model_validate(prayer),
    )


@router.delete("/{prayer_id}", response_model=APIResponse)
async def delete_prayer_request(*, session: SessionDep, current_user: CurrentPrincipal, prayer_id: str) -> Any:
    service = PrayerRequestService(session)
    prayer = service.get_or_404(prayer_id)
    service.delete_request(prayer, current_user)
    return APIResponse(message="Prayer request deleted successfully")
