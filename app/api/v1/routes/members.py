from typing import Any, Optional

from fastapi import APIRouter, Query, status

from app.api.deps import CurrentPrincipal, SessionDep
from app.models.common import MemberRole, MembershipStatus
from app.schemas.common import APIResponse
from app.schemas.member import MemberCreate, MemberRead, MemberUpdate
from app.services.member import MemberService

router = APIRouter()


@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def create_member(*, session: SessionDep, current_user: CurrentPrincipal, member_in: MemberCreate) -> Any:
    """
    Register a member. The email must not already be registered.
    """
    member = MemberService(session).create_member(member_in)
    return APIResponse(message="Member created successfully", data=MemberRead.model_validate(member))


@router.get("", response_model=APIResponse)
async def read_members(
    *,
    session: SessionDep,
    current_user: CurrentPrincipal,
    status: Optional[MembershipStatus] = None,
    role: Optional[MemberRole] = None,
    search: Optional[str] = None,
    sort: Optional[str] = Query(None, description="Field name, prefix with '-' for descending"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> Any:
    """
    List members with status / role filters and a name or email search.
    """
    members, pagination = MemberService(session).list(
        page, limit, status=status, role=role, search=search, sort=sort
    )
    return APIResponse(
        data=[MemberRead.model_validate(member) for member in members],
        pagination=pagination,
    )


@router.get("/stats", response_model=APIResponse)
async def read_member_stats(*, session: SessionDep, current_user: CurrentPrincipal) -> Any:
    return APIResponse(data=MemberService(session).stats())


@router.get("/email/{email}", response_model=APIResponse)
async def read_member_by_email(*, session: SessionDep, current_user: CurrentPrincipal, email: str) -> Any:
    member = MemberService(session).get_by_email(email)
    return APIResponse(data=MemberRead.model_validate(member))


@router.get("/{member_id}", response_model=APIResponse)
async def read_member(*, session: SessionDep, current_user: CurrentPrincipal, member_id: str) -> Any:
    member = MemberService(session).get_or_404(member_id)
    return APIResponse(data=MemberRead.model_validate(member))


@router.put("/{member_id}", response_model=APIResponse)
async def update_member(
    *,
    session: SessionDep,
    current_user: CurrentPrincipal,
    member_id: str,
    member_in: MemberUpdate,
) -> Any:
    service = MemberService(session)
    member = service.get_or_404(member_id)
    member = service.update_member(member, member_in)
    return APIResponse(message="Member updated successfully", data=MemberRead.model_validate(member))


@router.patch("/{member_id}/activity", response_model=APIResponse)
async def touch_member_activity(*, session: SessionDep, current_user: CurrentPrincipal, member_id: str) -> Any:
    """
    Record that the member was active just now.
    """
    service = MemberService(session)
    member = service.touch(service.get_or_404(member_id))
    return APIResponse(
        message="Last activity updated",
        data={"id": member.id, "last_activity": member.last_activity},
    )


@router.delete("/{member_id}", response_model=APIResponse)
async def delete_member(*, session: SessionDep, current_user: CurrentPrincipal, member_id: str) -> Any:
    service = MemberService(session)
    service.delete(service.get_or_404(member_id))
    return APIResponse(message="Member deleted successfully")
