"""Donation service: payment ids, recurrence scheduling and statistics."""
import calendar
import logging
import random
import string
import time
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func

from app.core.security import Principal
from app.core.workflow import PAYMENT_TRANSITIONS, check_transition
from app.models.common import PaymentStatus, RecurrenceFrequency, utcnow
from app.models.donation import Donation
from app.schemas.common import Pagination
from app.schemas.donation import DonationCreate, DonationStats, DonationTypeStats, DonationUpdate
from app.services.crud import CRUDService

logger = logging.getLogger(__name__)

BASE36 = string.digits + string.ascii_lowercase


def add_months(value: datetime, months: int) -> datetime:
    """Calendar month arithmetic, clamping the day to the target month's end."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def compute_next_recurrence(frequency: Optional[RecurrenceFrequency], start: datetime) -> Optional[datetime]:
    if frequency is None:
        return None
    frequency = RecurrenceFrequency(frequency)
    if frequency == RecurrenceFrequency.WEEKLY:
        return start + timedelta(days=7)
    if frequency == RecurrenceFrequency.MONTHLY:
        return add_months(start, 1)
    if frequency == RecurrenceFrequency.QUARTERLY:
        return add_months(start, 3)
    return add_months(start, 12)


def generate_payment_id() -> str:
    suffix = "".join(random.choices(BASE36, k=9))
    return f"DON_{int(time.time() * 1000)}_{suffix}"


class DonationService(CRUDService[Donation]):
    model = Donation
    label = "donation"
    conflict_message = "A donation with this payment id already exists"

    def list(
        self,
        page: int,
        limit: int,
        payment_status: Optional[PaymentStatus] = None,
        donation_type=None,
        payment_method=None,
        is_recurring: Optional[bool] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Tuple[List[Donation], Pagination]:
        query = self.query()
        if payment_status:
            query = query.filter(Donation.payment_status == payment_status)
        if donation_type:
            query = query.filter(Donation.donation_type == donation_type)
        if payment_method:
            query = query.filter(Donation.payment_method == payment_method)
        if is_recurring is not None:
            query = query.filter(Donation.is_recurring == is_recurring)
        if start_date:
            query = query.filter(Donation.created_at >= start_date)
        if end_date:
            query = query.filter(Donation.created_at <= end_date)
        return self.paginate(query, page, limit, [Donation.created_at.desc()])

    def list_for_donor(self, donor_id: str, page: int, limit: int) -> Tuple[List[Donation], Pagination]:
        query = self.query(Donation.donor_id == donor_id)
        return self.paginate(query, page, limit, [Donation.created_at.desc()])

    def create_donation(self, payload: DonationCreate, principal: Optional[Principal] = None) -> Donation:
        data = payload.model_dump()
        now = utcnow()

        data["donor_id"] = principal.id if principal else None
        data["payment_id"] = generate_payment_id()
        if data["is_anonymous"]:
            data["donor_name"] = None
            data["donor_email"] = None
        if data["is_recurring"] and data["recurrence_frequency"]:
            data["next_recurrence_date"] = compute_next_recurrence(data["recurrence_frequency"], now)
        else:
            data["recurrence_frequency"] = None
            data["next_recurrence_date"] = None

        donation = self.create(data)
        logger.info(f"Donation {donation.payment_id} recorded ({donation.amount} {donation.currency.value})")
        return donation

    def update_donation(self, donation: Donation, payload: DonationUpdate) -> Donation:
        data: Dict[str, Any] = payload.model_dump(exclude_unset=True)

        if data.get("payment_status") is not None:
            check_transition(PAYMENT_TRANSITIONS, donation.payment_status, data["payment_status"], "payment")
        else:
            data.pop("payment_status", None)

        is_recurring = data.get("is_recurring")
        if is_recurring is None:
            is_recurring = donation.is_recurring
            data.pop("is_recurring", None)

        if not is_recurring:
            data["recurrence_frequency"] = None
            data["next_recurrence_date"] = None
        elif "recurrence_frequency" in data:
            frequency = data["recurrence_frequency"]
            if frequency is None:
                data["next_recurrence_date"] = None
            elif frequency != donation.recurrence_frequency:
                data["next_recurrence_date"] = compute_next_recurrence(frequency, utcnow())

        is_anonymous = data.get("is_anonymous")
        if is_anonymous is None:
            is_anonymous = donation.is_anonymous
            data.pop("is_anonymous", None)
        if is_anonymous:
            data["donor_name"] = None
            data["donor_email"] = None

        return self.update(donation, data)

    def stats(self, start_date: Optional[datetime] = None, end_date: Optional[datetime] = None) -> DonationStats:
        criteria = [Donation.payment_status == PaymentStatus.COMPLETED]
        if start_date:
            criteria.append(Donation.created_at >= start_date)
        if end_date:
            criteria.append(Donation.created_at <= end_date)

        total, count, average, maximum, minimum = (
            self.session.query(
                func.sum(Donation.amount),
                func.count(Donation.id),
                func.avg(Donation.amount),
                func.max(Donation.amount),
                func.min(Donation.amount),
            )
            .filter(*criteria)
            .one()
        )

        total_by_type = func.sum(Donation.amount).label("total_amount")
        rows = (
            self.session.query(Donation.donation_type, total_by_type, func.count(Donation.id))
            .filter(*criteria)
            .group_by(Donation.donation_type)
            .order_by(total_by_type.desc())
            .all()
        )

        return DonationStats(
            total_amount=float(total or 0),
            total_donations=count or 0,
            average_amount=float(average or 0),
            max_amount=float(maximum or 0),
            min_amount=float(minimum or 0),
            by_type=[
                DonationTypeStats(donation_type=donation_type, total_amount=float(amount or 0), count=n)
                for donation_type, amount, n in rows
            ],
        )
