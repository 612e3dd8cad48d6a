import logging
from typing import Any, Optional

from fastapi import APIRouter, Query, Request, status

from app.api.deps import AdminPrincipal, BlobStoreDep, SessionDep, read_image_form
from app.core.config import settings
from app.models.common import TestimonyCategory, TestimonyStatus
from app.schemas.common import APIResponse, enum_filter
from app.schemas.testimony import PublicTestimonyRead, TestimonyRead, TestimonyStatusUpdate
from app.services.testimony import TestimonyService, absolute_image_urls

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter()


def _with_absolute_images(item, request: Request):
    return item.model_copy(update={"images": absolute_image_urls(item.images, str(request.base_url))})


# Public routes
@router.post("/submit", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def submit_testimony(*, request: Request, session: SessionDep, blob_store: BlobStoreDep) -> Any:
    """
    Submit a testimony for moderation (multipart, up to 3 ``images``).

    At most 3 submissions per email are accepted over 24 hours; uploaded
    images are discarded whenever the submission is refused.
    """
    fields, uploads = await read_image_form(request, settings.MAX_TESTIMONY_IMAGES)
    testimony = await TestimonyService(session, blob_store).submit(fields, uploads)
    return APIResponse(
        message="Testimony submitted successfully. It will be published after moderation.",
        data={
            "id": testimony.id,
            "title": testimony.title,
            "status": testimony.status,
            "images": testimony.images,
        },
    )


@router.get("/public", response_model=APIResponse)
async def read_public_testimonies(
    *,
    request: Request,
    session: SessionDep,
    category: Optional[str] = None,
    featured: Optional[bool] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
) -> Any:
    """
    Approved testimonies, newest first, without author email or approver.
    """
    testimonies, pagination = TestimonyService(session).list_public(
        page,
        limit,
        category=enum_filter(TestimonyCategory, category, "category"),
        featured=featured,
    )
    return APIResponse(
        data=[_with_absolute_images(PublicTestimonyRead.model_validate(t), request) for t in testimonies],
        pagination=pagination,
    )


# Admin routes
@router.get("/admin", response_model=APIResponse)
async def read_testimonies(
    *,
    request: Request,
    session: SessionDep,
    current_user: AdminPrincipal,
    status: Optional[str] = None,
    category: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> Any:
    testimonies, pagination = TestimonyService(session).list_all(
        page,
        limit,
        status=enum_filter(TestimonyStatus, status, "status"),
        category=enum_filter(TestimonyCategory, category, "category"),
    )
    return APIResponse(
        data=[_with_absolute_images(TestimonyRead.model_validate(t), request) for t in testimonies],
        pagination=pagination,
    )


@router.get("/admin/stats", response_model=APIResponse)
async def read_testimony_stats(*, session: SessionDep, current_user: AdminPrincipal) -> Any:
    return APIResponse(data=TestimonyService(session).stats())


@router.get("/admin/{testimony_id}", response_model=APIResponse)
async def read_testimony(
    *,
    request: Request,
    session: SessionDep,
    current_user: AdminPrincipal,
    testimony_id: str,
) -> Any:
    testimony = TestimonyService(session).get_or_404(testimony_id)
    return APIResponse(data=_with_absolute_images(TestimonyRead.model_validate(testimony), request))


@router.put("/admin/{testimony_id}/status", response_model=APIResponse)
async def update_testimony_status(
    *,
    session: SessionDep,
    current_user: AdminPrincipal,
    testimony_id: str,
    status_in: TestimonyStatusUpdate,
) -> Any:
    """
    Moderate a testimony.

    Allowed moves: pending -> approved / rejected / archived,
    approved -> scheduled / archived, scheduled and rejected -> archived.
    Scheduling requires ``scheduled_date``.
    """
    service = TestimonyService(session)
    testimony = service.get_or_404(testimony_id)
    testimony = service.update_status(testimony, status_in, current_user)
    return APIResponse(message="Status updated successfully", data=TestimonyRead.model_validate(testimony))


@router.delete("/admin/{testimony_id}", response_model=APIResponse)
async def delete_testimony(
    *,
    session: SessionDep,
    blob_store: BlobStoreDep,
    current_user: AdminPrincipal,
    testimony_id: str,
) -> Any:
    service = TestimonyService(session, blob_store)
    service.delete_testimony(service.get_or_404(testimony_id))
    logger.info(f"Testimony {testimony_id} deleted by {current_user.id}")
    return APIResponse(message="Testimony deleted successfully")
