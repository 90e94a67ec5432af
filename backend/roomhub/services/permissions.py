from __future__ import annotations

from uuid import UUID

from fastapi import HTTPException, status
from sqlmodel import Session, select

from roomhub.models import Booking, OrganizationMember, User

ADMIN_ROLE = "ADMIN"
STAFF_ROLES = frozenset({"CENTER_OWNER", "TRAINING_MANAGER"})


def is_admin(user: User) -> bool:
    return user.role == ADMIN_ROLE


def member_organization_ids(session: Session, user: User) -> list[UUID]:
    return list(
        session.exec(
            select(OrganizationMember.organization_id).where(
                OrganizationMember.user_id == user.id
            )
        ).all()
    )


def is_organization_staff(session: Session, user: User, organization_id: UUID) -> bool:
    """Admins, or center owners/managers who are members of the organization."""
    if is_admin(user):
        return True
    if user.role not in STAFF_ROLES:
        return False
    membership = session.exec(
        select(OrganizationMember).where(
            OrganizationMember.user_id == user.id,
            OrganizationMember.organization_id == organization_id,
        )
    ).one_or_none()
    return membership is not None


def ensure_organization_staff(session: Session, user: User, organization_id: UUID) -> None:
    if not is_organization_staff(session, user, organization_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access to organization denied",
        )


def ensure_booking_access(session: Session, user: User, booking: Booking) -> None:
    if booking.user_id == user.id:
        return
    if is_organization_staff(session, user, booking.organization_id):
        return
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Access to booking denied",
    )
