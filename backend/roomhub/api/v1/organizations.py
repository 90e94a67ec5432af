from __future__ import annotations

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import select

from roomhub.api.deps import get_current_user, require_roles
from roomhub.core.cache import invalidate_hours_cache
from roomhub.db import SessionDep
from roomhub.models import Organization, OrganizationMember, User
from roomhub.schemas import OperatingHours, OrganizationCreate, OrganizationRead
from roomhub.services.permissions import ADMIN_ROLE, ensure_organization_staff

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=List[OrganizationRead], summary="List organizations")
def list_organizations(
    session: SessionDep,
    current_user: User = Depends(get_current_user),
) -> List[Organization]:
    statement = (
        select(Organization)
        .where(Organization.is_active == True)  # noqa: E712
        .order_by(Organization.name.asc())
    )
    return session.exec(statement).all()


@router.post(
    "/",
    response_model=OrganizationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create organization",
)
def create_organization(
    payload: OrganizationCreate,
    session: SessionDep,
    current_user: User = Depends(require_roles(ADMIN_ROLE, "CENTER_OWNER")),
) -> Organization:
    """Create a training center; the creating center owner becomes its OWNER member."""
    existing = session.exec(select(Organization).where(Organization.slug == payload.slug)).one_or_none()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Organization slug is already taken",
        )

    data = payload.model_dump(exclude={"hours"})
    organization = Organization(
        **data,
        hours=payload.hours.to_storage() if payload.hours else None,
    )
    session.add(organization)
    session.flush()
    if current_user.role == "CENTER_OWNER":
        session.add(
            OrganizationMember(
                user_id=current_user.id,
                organization_id=organization.id,
                role="OWNER",
            )
        )
    session.commit()
    session.refresh(organization)
    logger.info("Created organization %s by %s", organization.id, current_user.id)
    return organization


@router.get("/{organization_id}", response_model=OrganizationRead, summary="Get organization by ID")
def get_organization(
    organization_id: UUID,
    session: SessionDep,
    current_user: User = Depends(get_current_user),
) -> Organization:
    organization = session.get(Organization, organization_id)
    if not organization:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Organization not found")
    return organization


@router.put(
    "/{organization_id}/hours",
    response_model=OrganizationRead,
    summary="Replace weekly operating hours",
)
def update_organization_hours(
    organization_id: UUID,
    payload: OperatingHours,
    session: SessionDep,
    current_user: User = Depends(get_current_user),
) -> Organization:
    organization = session.get(Organization, organization_id)
    if not organization:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Organization not found")
    ensure_organization_staff(session, current_user, organization_id)

    organization.hours = payload.to_storage()
    organization.touch()
    session.add(organization)
    session.commit()
    session.refresh(organization)
    invalidate_hours_cache(organization_id)
    logger.info("Updated operating hours of organization %s", organization_id)
    return organization
