from __future__ import annotations

from datetime import date as date_type, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from roomhub.scheduling.status import BookingStatus, PaymentStatus


class Booking(SQLModel, table=True):
    """Reservation of a room for a half-open [start_time, end_time) slot on one day."""

    __tablename__ = "bookings"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    organization_id: UUID = Field(foreign_key="organizations.id", nullable=False, index=True)
    room_id: UUID = Field(foreign_key="rooms.id", nullable=False, index=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    date: date_type = Field(nullable=False, index=True)
    # Wall-clock "HH:MM", timezone-naive like `date`
    start_time: str = Field(max_length=5, nullable=False)
    end_time: str = Field(max_length=5, nullable=False)
    status: str = Field(default=BookingStatus.PENDING.value, max_length=20, index=True)
    total_amount: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)
    commission: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)
    payment_status: str = Field(default=PaymentStatus.PENDING.value, max_length=20, index=True)
    payment_method: Optional[str] = Field(default=None, max_length=20)
    notes: Optional[str] = Field(default=None, max_length=1000)
    cancel_reason: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False, index=True)
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()
