from typing import Any, Optional

from fastapi import APIRouter, Query, status

from app.api.deps import AdminPrincipal, SessionDep
from app.models.common import ResourceCategory
from app.schemas.common import APIResponse, enum_filter
from app.schemas.resource import FAQRead, ResourceCreate, ResourceRead, ResourceUpdate
from app.services.resource import ResourceService

router = APIRouter()


# Public routes
@router.get("/public", response_model=APIResponse)
async def read_published_resources(
    *,
    session: SessionDep,
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
) -> Any:
    """
    Published resources ordered by display order then newest.
    """
    resources, pagination = ResourceService(session).list_published(
        page, limit, category=enum_filter(ResourceCategory, category, "category"), search=search
    )
    return APIResponse(
        data=[ResourceRead.model_validate(resource) for resource in resources],
        pagination=pagination,
    )


@router.get("/public/faqs", response_model=APIResponse)
async def read_faqs(*, session: SessionDep) -> Any:
    """
    Published FAQ entries, question (title) and answer (description) only.
    """
    faqs = ResourceService(session).faqs()
    return APIResponse(data=[FAQRead.model_validate(faq) for faq in faqs])


@router.get("/public/{resource_id}", response_model=APIResponse)
async def read_published_resource(*, session: SessionDep, resource_id: str) -> Any:
    resource = ResourceService(session).get_published(resource_id)
    return APIResponse(data=ResourceRead.model_validate(resource))


@router.put("/public/{resource_id}/download", response_model=APIResponse)
async def register_download(*, session: SessionDep, resource_id: str) -> Any:
    resource = ResourceService(session).register_download(resource_id)
    return APIResponse(message="Download counted", data=ResourceRead.model_validate(resource))


# Admin routes
@router.get("/admin", response_model=APIResponse)
async def read_resources(
    *,
    session: SessionDep,
    current_user: AdminPrincipal,
    category: Optional[str] = None,
    published: Optional[bool] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> Any:
    resources, pagination = ResourceService(session).list_all(
        page,
        limit,
        category=enum_filter(ResourceCategory, category, "category"),
        published=published,
        search=search,
    )
    return APIResponse(
        data=[ResourceRead.model_validate(resource) for resource in resources],
        pagination=pagination,
    )


@router.get("/admin/stats", response_model=APIResponse)
async def read_resource_stats(*, session: SessionDep, current_user: AdminPrincipal) -> Any:
    return APIResponse(data=ResourceService(session).stats())


@router.post("/admin", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def create_resource(*, session: SessionDep, current_user: AdminPrincipal, resource_in: ResourceCreate) -> Any:
    """
    Create a resource; publishing it now stamps ``published_at``.
    """
    resource = ResourceService(session).create_resource(resource_in)
    return APIResponse(message="Resource created successfully", data=ResourceRead.model_validate(resource))


@router.put("/admin/{resource_id}", response_model=APIResponse)
async def update_resource(
    *,
    session: SessionDep,
    current_user: AdminPrincipal,
    resource_id: str,
    resource_in: ResourceUpdate,
) -> Any:
    service = ResourceService(session)
    resource = service.update_resource(service.get_or_404(resource_id), resource_in)
    return APIResponse(message="Resource updated successfully", data=ResourceRead.model_validate(resource))


@router.delete("/admin/{resource_id}", response_model=APIResponse)
async def delete_resource(*, session: SessionDep, current_user: AdminPrincipal, resource_id: str) -> Any:
    service = ResourceService(session)
    service.delete(service.get_or_404(resource_id))
    return APIResponse(message="Resource deleted successfully")
