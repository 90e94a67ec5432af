from __future__ import annotations

from datetime import date as date_type, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from roomhub.scheduling.status import BookingStatus, PaymentMethod, PaymentStatus

HHMM_PATTERN = r"^\d{2}:\d{2}$"


class BookingCreate(BaseModel):
    organization_id: UUID
    room_id: UUID
    date: date_type
    start_time: str = Field(pattern=HHMM_PATTERN, description="Start time in HH:MM format")
    end_time: str = Field(pattern=HHMM_PATTERN, description="End time in HH:MM format")
    payment_method: Optional[PaymentMethod] = None
    notes: Optional[str] = Field(default=None, max_length=1000)


class BookingUpdate(BaseModel):
    """Partial update; a new date or time re-runs availability and conflict checks."""

    date: Optional[date_type] = None
    start_time: Optional[str] = Field(default=None, pattern=HHMM_PATTERN)
    end_time: Optional[str] = Field(default=None, pattern=HHMM_PATTERN)
    status: Optional[BookingStatus] = None
    payment_method: Optional[PaymentMethod] = None
    payment_status: Optional[PaymentStatus] = None
    notes: Optional[str] = Field(default=None, max_length=1000)
    cancel_reason: Optional[str] = Field(default=None, max_length=500)


class RescheduleRequest(BaseModel):
    """Drop target of a drag on the timetable.

    Without ``end_time`` the booking keeps its duration.
    """

    date: date_type
    start_time: str = Field(pattern=HHMM_PATTERN)
    end_time: Optional[str] = Field(default=None, pattern=HHMM_PATTERN)


class BookingRead(BaseModel):
    id: UUID
    organization_id: UUID
    room_id: UUID
    user_id: UUID
    date: date_type
    start_time: str
    end_time: str
    status: BookingStatus
    total_amount: Decimal
    commission: Decimal
    payment_status: PaymentStatus
    payment_method: Optional[PaymentMethod] = None
    notes: Optional[str] = None
    cancel_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ConflictGroupRead(BaseModel):
    room_id: UUID
    date: date_type
    start_time: str
    end_time: str
    bookings: List[BookingRead]


class ResolveConflictRequest(BaseModel):
    room_id: UUID
    date: date_type
    winner_id: UUID
    cancel_reason: Optional[str] = Field(default=None, max_length=500)


class ResolveConflictResponse(BaseModel):
    confirmed: BookingRead
    cancelled: List[BookingRead]


class RoomDayAvailability(BaseModel):
    room_id: UUID
    date: date_type
    open: bool
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    bookings: List[BookingRead] = []


class TimetableDay(BaseModel):
    date: date_type
    weekday: str
    open: bool
    open_time: Optional[str] = None
    close_time: Optional[str] = None


class TimetableBooking(BookingRead):
    start_hour: float
    end_hour: float
    is_conflicted: bool = False


class RoomTimetable(BaseModel):
    room_id: UUID
    week_number: int
    week_start: date_type
    week_end: date_type
    start_hour: int
    end_hour: int
    days: List[TimetableDay]
    bookings: List[TimetableBooking]
    conflicts: List[ConflictGroupRead]
