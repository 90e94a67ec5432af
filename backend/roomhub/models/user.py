from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """Marketplace account: admins, center staff, teachers and partners."""

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    email: str = Field(index=True, unique=True, max_length=255)
    full_name: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    hashed_password: str = Field(max_length=255)
    is_active: bool = Field(default=True)
    # ADMIN, CENTER_OWNER, TRAINING_MANAGER, TEACHER, PARTNER
    role: str = Field(default="TEACHER", max_length=50)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
