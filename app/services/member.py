import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, or_

from app.core.exceptions import Conflict, NotFound
from app.models.common import MemberRole, MembershipStatus, utcnow
from app.models.member import Member
from app.schemas.common import Pagination
from app.schemas.member import MemberCreate, MemberUpdate
from app.services.crud import LIKE_ESCAPE, CRUDService, contains_pattern

logger = logging.getLogger(__name__)


class MemberService(CRUDService[Member]):
    model = Member
    label = "member"
    conflict_message = "A member with this email already exists"
    sortable = ("full_name", "email", "join_date", "created_at", "last_activity")

    def get_by_email(self, email: str) -> Member:
        member = self.query(func.lower(Member.email) == email.strip().lower()).first()
        if member is None:
            raise NotFound("Member not found")
        return member

    def _check_email_available(self, email: str, exclude_id=None) -> None:
        query = self.query(Member.email == email)
        if exclude_id is not None:
            query = query.filter(Member.id != exclude_id)
        if query.first() is not None:
            raise Conflict(self.conflict_message, errors=[{"field": "email", "message": "Email already registered"}])

    @staticmethod
    def _emergency_contact(data: Dict[str, Any]) -> None:
        # Only kept when a contact name is provided
        if "emergency_contact" in data:
            contact = data["emergency_contact"]
            data["emergency_contact"] = contact if contact and contact.get("name") else None

    def list(
        self,
        page: int,
        limit: int,
        status: Optional[MembershipStatus] = None,
        role: Optional[MemberRole] = None,
        search: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> Tuple[List[Member], Pagination]:
        query = self.query()
        if status:
            query = query.filter(Member.membership_status == status)
        if role:
            query = query.filter(Member.role == role)
        if search:
            pattern = contains_pattern(search)
            query = query.filter(
                or_(
                    Member.full_name.ilike(pattern, escape=LIKE_ESCAPE),
                    Member.email.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        return self.paginate(query, page, limit, self.order_by(sort or "full_name", []))

    def create_member(self, payload: MemberCreate) -> Member:
        self._check_email_available(payload.email)
        data = payload.model_dump()
        self._emergency_contact(data)
        member = self.create(data)
        logger.info(f"Member {member.email} registered")
        return member

    def update_member(self, member: Member, payload: MemberUpdate) -> Member:
        data = payload.model_dump(exclude_unset=True)
        for field in ("email", "full_name", "membership_status", "role", "spiritual_gifts", "ministries"):
            if field in data and data[field] is None:
                data.pop(field)
        if "email" in data and data["email"] != member.email:
            self._check_email_available(data["email"], exclude_id=member.id)
        self._emergency_contact(data)
        return self.update(member, data)

    def touch(self, member: Member) -> Member:
        return self.update(member, {"last_activity": utcnow()})

    def stats(self) -> Dict[str, Any]:
        rows = (
            self.session.query(Member.membership_status, func.count(Member.id))
            .group_by(Member.membership_status)
            .all()
        )
        by_status = {status.value: count for status, count in rows}
        return {
            "total": sum(by_status.values()),
            "active": by_status.get(MembershipStatus.ACTIVE.value, 0),
            "by_status": by_status,
        }
