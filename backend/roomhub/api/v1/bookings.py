from __future__ import annotations

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from roomhub.api.deps import get_current_user
from roomhub.db import SessionDep
from roomhub.models import Booking, Room, User
from roomhub.scheduling import BookingStatus, PaymentStatus
from roomhub.schemas import (
    BookingCreate,
    BookingRead,
    BookingUpdate,
    ConflictGroupRead,
    PaginatedResponse,
    RescheduleRequest,
    ResolveConflictRequest,
    ResolveConflictResponse,
)
from roomhub.services import bookings as booking_service
from roomhub.services.permissions import ensure_booking_access, ensure_organization_staff

router = APIRouter()


def _parse_statuses(raw: Optional[str]) -> list[BookingStatus]:
    if not raw:
        return []
    try:
        return [BookingStatus(part.strip().upper()) for part in raw.split(",") if part.strip()]
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid status filter: {raw}",
        ) from None


@router.get("/", response_model=PaginatedResponse[BookingRead], summary="List bookings")
def list_bookings(
    session: SessionDep,
    current_user: User = Depends(get_current_user),
    organization_id: Optional[UUID] = Query(default=None),
    room_id: Optional[UUID] = Query(default=None),
    status_filter: Optional[str] = Query(
        default=None, alias="status", description="Comma-separated statuses"
    ),
    payment_status: Optional[PaymentStatus] = Query(default=None),
    date_from: Optional[date] = Query(default=None),
    date_to: Optional[date] = Query(default=None),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=100),
) -> PaginatedResponse[BookingRead]:
    items, total = booking_service.list_bookings(
        session,
        current_user,
        organization_id=organization_id,
        room_id=room_id,
        statuses=_parse_statuses(status_filter),
        payment_status=payment_status,
        date_from=date_from,
        date_to=date_to,
        page=page,
        page_size=page_size,
    )
    return PaginatedResponse[BookingRead].create(
        items=[BookingRead.model_validate(b) for b in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post(
    "/",
    response_model=BookingRead,
    status_code=status.HTTP_201_CREATED,
    summary="Request a booking",
)
def create_booking(
    payload: BookingCreate,
    session: SessionDep,
    current_user: User = Depends(get_current_user),
) -> Booking:
    return booking_service.create_booking(session, current_user, payload)


@router.get(
    "/conflicts",
    response_model=List[ConflictGroupRead],
    summary="Overlapping pending or confirmed bookings of a room",
)
def list_conflicts(
    session: SessionDep,
    room_id: UUID = Query(...),
    date_from: date = Query(...),
    date_to: Optional[date] = Query(default=None),
    current_user: User = Depends(get_current_user),
) -> List[ConflictGroupRead]:
    room = session.get(Room, room_id)
    if not room:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    ensure_organization_staff(session, current_user, room.organization_id)

    groups = booking_service.conflict_groups_for_room(session, room_id, date_from, date_to or date_from)
    return [
        ConflictGroupRead(
            room_id=group.room_id,
            date=group.date,
            start_time=group.start_time,
            end_time=group.end_time,
            bookings=[BookingRead.model_validate(b) for b in group.bookings],
        )
        for group in groups
    ]


@router.post(
    "/conflicts/resolve",
    response_model=ResolveConflictResponse,
    summary="Confirm one booking of a conflict and cancel the others",
)
def resolve_conflict(
    payload: ResolveConflictRequest,
    session: SessionDep,
    current_user: User = Depends(get_current_user),
) -> ResolveConflictResponse:
    winner, losers = booking_service.resolve_conflict(
        session,
        current_user,
        payload.room_id,
        payload.date,
        payload.winner_id,
        cancel_reason=payload.cancel_reason,
    )
    return ResolveConflictResponse(
        confirmed=BookingRead.model_validate(winner),
        cancelled=[BookingRead.model_validate(b) for b in losers],
    )


@router.get("/{booking_id}", response_model=BookingRead, summary="Get booking by id")
def get_booking(
    booking_id: UUID,
    session: SessionDep,
    current_user: User = Depends(get_current_user),
) -> Booking:
    booking = booking_service.get_booking_or_404(session, booking_id)
    ensure_booking_access(session, current_user, booking)
    return booking


@router.put("/{booking_id}", response_model=BookingRead, summary="Update booking")
def update_booking(
    booking_id: UUID,
    payload: BookingUpdate,
    session: SessionDep,
    current_user: User = Depends(get_current_user),
) -> Booking:
    booking = booking_service.get_booking_or_404(session, booking_id)
    return booking_service.update_booking(session, current_user, booking, payload)


@router.post(
    "/{booking_id}/reschedule",
    response_model=BookingRead,
    summary="Move a booking to another slot",
)
def reschedule_booking(
    booking_id: UUID,
    payload: RescheduleRequest,
    session: SessionDep,
    current_user: User = Depends(get_current_user),
) -> Booking:
    booking = booking_service.get_booking_or_404(session, booking_id)
    return booking_service.reschedule_booking(session, current_user, booking, payload)


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete booking")
def delete_booking(
    booking_id: UUID,
    session: SessionDep,
    current_user: User = Depends(get_current_user),
) -> None:
    booking = booking_service.get_booking_or_404(session, booking_id)
    booking_service.delete_booking(session, current_user, booking)
