from __future__ import annotations

from uuid import UUID

from sqlmodel import Field, SQLModel


class OrganizationMember(SQLModel, table=True):
    """Staff membership of a user in an organization."""

    __tablename__ = "organization_members"

    user_id: UUID = Field(
        foreign_key="users.id", primary_key=True, nullable=False, index=True
    )
    organization_id: UUID = Field(
        foreign_key="organizations.id", primary_key=True, nullable=False, index=True
    )
    role: str = Field(default="MANAGER", max_length=20)  # OWNER, MANAGER
