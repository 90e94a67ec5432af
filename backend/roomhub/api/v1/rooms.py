from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import select

from roomhub.api.deps import get_current_user
from roomhub.db import SessionDep
from roomhub.models import Organization, Room, User
from roomhub.schemas import RoomCreate, RoomDayAvailability, RoomRead, RoomTimetable, RoomUpdate
from roomhub.services.permissions import ensure_organization_staff
from roomhub.services.timetable import room_day_availability, room_timetable

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_room_or_404(session: SessionDep, room_id: UUID) -> Room:
    room = session.get(Room, room_id)
    if not room:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    return room


@router.get("/", response_model=List[RoomRead], summary="List rooms")
def list_rooms(
    session: SessionDep,
    organization_id: Optional[UUID] = Query(default=None),
) -> List[Room]:
    statement = select(Room).where(Room.is_active == True)  # noqa: E712
    if organization_id:
        statement = statement.where(Room.organization_id == organization_id)
    return session.exec(statement.order_by(Room.name)).all()


@router.post(
    "/",
    response_model=RoomRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create room",
)
def create_room(
    payload: RoomCreate,
    session: SessionDep,
    current_user: User = Depends(get_current_user),
) -> Room:
    if not session.get(Organization, payload.organization_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Organization not found")
    ensure_organization_staff(session, current_user, payload.organization_id)

    room = Room(**payload.model_dump())
    session.add(room)
    session.commit()
    session.refresh(room)
    logger.info("Created room %s in organization %s", room.id, room.organization_id)
    return room


@router.get("/{room_id}", response_model=RoomRead, summary="Get room by id")
def get_room(room_id: UUID, session: SessionDep) -> Room:
    return _get_room_or_404(session, room_id)


@router.put("/{room_id}", response_model=RoomRead, summary="Update room")
def update_room(
    room_id: UUID,
    payload: RoomUpdate,
    session: SessionDep,
    current_user: User = Depends(get_current_user),
) -> Room:
    room = _get_room_or_404(session, room_id)
    ensure_organization_staff(session, current_user, room.organization_id)

    update_data = payload.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(room, field, value)
    room.touch()

    session.add(room)
    session.commit()
    session.refresh(room)
    return room


@router.delete("/{room_id}", status_code=status.HTTP_200_OK, summary="Deactivate room")
def delete_room(
    room_id: UUID,
    session: SessionDep,
    current_user: User = Depends(get_current_user),
) -> dict[str, str]:
    """Rooms are never removed; bookings keep pointing at them."""
    room = _get_room_or_404(session, room_id)
    ensure_organization_staff(session, current_user, room.organization_id)

    room.is_active = False
    room.touch()
    session.add(room)
    session.commit()
    logger.info("Deactivated room %s", room_id)
    return {"status": "deactivated"}


@router.get(
    "/{room_id}/availability",
    response_model=RoomDayAvailability,
    summary="Opening window and bookings of a room for one day",
)
def get_room_availability(
    room_id: UUID,
    session: SessionDep,
    day: date = Query(..., alias="date", description="Day to inspect (YYYY-MM-DD)"),
) -> RoomDayAvailability:
    room = _get_room_or_404(session, room_id)
    return room_day_availability(session, room, day)


@router.get(
    "/{room_id}/timetable",
    response_model=RoomTimetable,
    summary="Weekly timetable of a room",
)
def get_room_timetable(
    room_id: UUID,
    session: SessionDep,
    week: Optional[date] = Query(default=None, description="Any day of the requested week"),
    current_user: User = Depends(get_current_user),
) -> RoomTimetable:
    room = _get_room_or_404(session, room_id)
    ensure_organization_staff(session, current_user, room.organization_id)
    return room_timetable(session, room, week or date.today())
