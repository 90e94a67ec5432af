from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from roomhub.scheduling.timeutils import parse_hhmm

HHMM_PATTERN = r"^\d{2}:\d{2}$"


class DayHours(BaseModel):
    """Opening hours for one weekday."""

    open: Optional[str] = Field(default=None, pattern=HHMM_PATTERN)
    close: Optional[str] = Field(default=None, pattern=HHMM_PATTERN)
    closed: bool = False

    @model_validator(mode="after")
    def check_bounds(self) -> "DayHours":
        if self.closed:
            return self
        if not self.open or not self.close:
            raise ValueError("open and close are required unless the day is closed")
        if parse_hhmm(self.open) >= parse_hhmm(self.close):
            raise ValueError("open must be before close")
        return self


class OperatingHours(BaseModel):
    """Weekly operating hours. A missing day is treated as closed."""

    monday: Optional[DayHours] = None
    tuesday: Optional[DayHours] = None
    wednesday: Optional[DayHours] = None
    thursday: Optional[DayHours] = None
    friday: Optional[DayHours] = None
    saturday: Optional[DayHours] = None
    sunday: Optional[DayHours] = None

    def to_storage(self) -> dict:
        return self.model_dump(exclude_none=True)


class OrganizationBase(BaseModel):
    name: str = Field(max_length=255)
    slug: str = Field(max_length=255)
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    is_active: bool = True


class OrganizationCreate(OrganizationBase):
    hours: Optional[OperatingHours] = None


class OrganizationRead(OrganizationBase):
    id: UUID
    hours: Optional[dict] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
