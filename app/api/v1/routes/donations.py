import logging
from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Query, status

from app.api.deps import CurrentPrincipal, OptionalPrincipal, SessionDep
from app.models.common import DonationType, PaymentMethod, PaymentStatus
from app.schemas.common import APIResponse
from app.schemas.donation import DonationCreate, DonationRead, DonationUpdate
from app.services.donation import DonationService

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def create_donation(
    *,
    session: SessionDep,
    current_user: OptionalPrincipal,
    donation_in: DonationCreate,
) -> Any:
    """
    Record a donation. Open to anonymous donors; when a token is sent the
    donation is linked to the caller.

    A unique payment id is generated and recurring donations get their next
    recurrence date computed from now.
    """
    donation = DonationService(session).create_donation(donation_in, current_user)
    return APIResponse(message="Donation recorded successfully", data=DonationRead.model_validate(donation))


@router.get("", response_model=APIResponse)
async def read_donations(
    *,
    session: SessionDep,
    current_user: CurrentPrincipal,
    payment_status: Optional[PaymentStatus] = None,
    donation_type: Optional[DonationType] = None,
    payment_method: Optional[PaymentMethod] = None,
    is_recurring: Optional[bool] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> Any:
    donations, pagination = DonationService(session).list(
        page,
        limit,
        payment_status=payment_status,
        donation_type=donation_type,
        payment_method=payment_method,
        is_recurring=is_recurring,
        start_date=start_date,
        end_date=end_date,
    )
    return APIResponse(
        data=[DonationRead.model_validate(donation) for donation in donations],
        pagination=pagination,
    )


@router.get("/stats", response_model=APIResponse)
async def read_donation_stats(
    *,
    session: SessionDep,
    current_user: CurrentPrincipal,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> Any:
    """
    Totals over completed donations, with a breakdown per donation type.
    """
    stats = DonationService(session).stats(start_date=start_date, end_date=end_date)
    return APIResponse(data=stats)


@router.get("/user/{donor_id}", response_model=APIResponse)
async def read_user_donations(
    *,
    session: SessionDep,
    current_user: CurrentPrincipal,
    donor_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> Any:
    donations, pagination = DonationService(session).list_for_donor(donor_id, page, limit)
    return APIResponse(
        data=[DonationRead.model_validate(donation) for donation in donations],
        pagination=pagination,
    )


@router.get("/{donation_id}", response_model=APIResponse)
async def read_donation(*, session: SessionDep, current_user: CurrentPrincipal, donation_id: str) -> Any:
    donation = DonationService(session).get_or_404(donation_id)
    return APIResponse(data=DonationRead.model_validate(donation))


@router.put("/{donation_id}", response_model=APIResponse)
async def update_donation(
    *,
    session: SessionDep,
    current_user: CurrentPrincipal,
    donation_id: str,
    donation_in: DonationUpdate,
) -> Any:
    service = DonationService(session)
    donation = service.get_or_404(donation_id)
    donation = service.update_donation(donation, donation_in)
    logger.info(f"Donation {donation.payment_id} updated by {current_user.email}")
    return APIResponse(message="Donation updated successfully", data=DonationRead.model_validate(donation))


@router.delete("/{donation_id}", response_model=APIResponse)
async def delete_donation(*, session: SessionDep, current_user: CurrentPrincipal, donation_id: str) -> Any:
    service = DonationService(session)
    donation = service.get_or_404(donation_id)
    service.delete(donation)
    logger.info(f"Donation {donation.payment_id} deleted by {current_user.email}")
    return APIResponse(message="Donation deleted successfully")
