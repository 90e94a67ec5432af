"""Seed a demo training center with rooms and accounts for local development.

Usage:
    python backend/scripts/seed_demo.py
"""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlmodel import Session, select

from roomhub.core.security import hash_password
from roomhub.db import init_db, session_scope
from roomhub.models import Organization, OrganizationMember, Room, User

logger = logging.getLogger("roomhub.seed")

DEMO_HOURS = {
    "monday": {"open": "08:00", "close": "18:00", "closed": False},
    "tuesday": {"open": "08:00", "close": "18:00", "closed": False},
    "wednesday": {"open": "08:00", "close": "18:00", "closed": False},
    "thursday": {"open": "08:00", "close": "18:00", "closed": False},
    "friday": {"open": "08:00", "close": "18:00", "closed": False},
    "saturday": {"open": "09:00", "close": "16:00", "closed": False},
    "sunday": {"closed": True},
}

DEMO_ROOMS = [
    {"name": "Salle Carthage", "capacity": 20, "area": 45, "hourly_rate": Decimal("40.00")},
    {"name": "Salle Hannibal", "capacity": 12, "area": 30, "hourly_rate": Decimal("25.00")},
    {"name": "Atelier informatique", "capacity": 15, "area": 40, "hourly_rate": Decimal("55.00")},
]

DEMO_ACCOUNTS = [
    ("owner@example.com", "Center Owner", "CENTER_OWNER"),
    ("teacher@example.com", "Demo Teacher", "TEACHER"),
    ("partner@example.com", "Demo Partner", "PARTNER"),
]

DEMO_PASSWORD = "Password123!"


def ensure_organization(session: Session) -> Organization:
    organization = session.exec(
        select(Organization).where(Organization.slug == "demo-center")
    ).one_or_none()
    if organization:
        return organization

    organization = Organization(
        name="Demo Training Center",
        slug="demo-center",
        description="Demo training center for local development",
        address="Avenue Habib Bourguiba, Tunis",
        hours=DEMO_HOURS,
    )
    session.add(organization)
    session.commit()
    session.refresh(organization)
    logger.info("Created organization %s", organization.slug)
    return organization


def ensure_user(session: Session, *, email: str, full_name: str, role: str) -> User:
    user = session.exec(select(User).where(User.email == email)).one_or_none()
    if user:
        return user

    user = User(
        email=email,
        full_name=full_name,
        hashed_password=hash_password(DEMO_PASSWORD),
        role=role,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("Created %s account %s", role, email)
    return user


def ensure_membership(session: Session, user: User, organization: Organization) -> None:
    if session.get(OrganizationMember, (user.id, organization.id)):
        return
    session.add(OrganizationMember(user_id=user.id, organization_id=organization.id, role="OWNER"))
    session.commit()


def ensure_rooms(session: Session, organization: Organization) -> None:
    for data in DEMO_ROOMS:
        existing = session.exec(
            select(Room).where(
                Room.organization_id == organization.id,
                Room.name == data["name"],
            )
        ).one_or_none()
        if existing:
            continue
        session.add(Room(organization_id=organization.id, **data))
        logger.info("Created room %s", data["name"])
    session.commit()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    init_db()
    with session_scope() as session:
        organization = ensure_organization(session)
        ensure_rooms(session, organization)
        for email, full_name, role in DEMO_ACCOUNTS:
            user = ensure_user(session, email=email, full_name=full_name, role=role)
            if role == "CENTER_OWNER":
                ensure_membership(session, user, organization)

    logger.info("Demo data ready. Accounts use the password %s", DEMO_PASSWORD)


if __name__ == "__main__":
    main()
