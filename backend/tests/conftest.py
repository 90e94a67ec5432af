from __future__ import annotations

import os
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

import roomhub.models  # noqa: F401
from roomhub.core import cache as cache_module
from roomhub.core.security import hash_password, issue_access_token
from roomhub.db import get_session, init_db
from roomhub.main import app
from roomhub.models import Organization, OrganizationMember, Room, User

# A Monday; the rest of that week follows from it.
MONDAY = date(2030, 1, 7)
SATURDAY = date(2030, 1, 12)
SUNDAY = date(2030, 1, 13)

CENTER_HOURS = {
    "monday": {"open": "08:00", "close": "18:00", "closed": False},
    "tuesday": {"open": "08:00", "close": "18:00", "closed": False},
    "wednesday": {"open": "08:00", "close": "18:00", "closed": False},
    "thursday": {"open": "08:00", "close": "18:00", "closed": False},
    "friday": {"open": "08:00", "close": "18:00", "closed": False},
    "saturday": {"open": "09:00", "close": "16:00", "closed": False},
    "sunday": {"closed": True},
}

_PASSWORD_HASH = hash_password("Password123!")


def make_booking(start, end, status="PENDING", room_id="room-1", day=MONDAY, **extra):
    """Lightweight stand-in accepted by the scheduling functions."""
    fields = dict(
        id=extra.pop("id", uuid4()),
        room_id=room_id,
        date=day,
        start_time=start,
        end_time=end,
        status=status,
        cancel_reason=None,
    )
    fields.update(extra)
    return SimpleNamespace(**fields)


@pytest.fixture(autouse=True)
def _in_memory_cache(monkeypatch):
    monkeypatch.setattr(cache_module, "_cache", None)
    monkeypatch.setattr(cache_module, "_get_redis_client", lambda: cache_module._InMemoryCache())
    yield


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def _create_user(session: Session, role: str, email: str | None = None) -> User:
    user = User(
        email=email or f"{role.lower()}-{uuid4().hex[:8]}@example.com",
        full_name=role.title(),
        hashed_password=_PASSWORD_HASH,
        role=role,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {issue_access_token(user.id, user.role)[0]}"}


@pytest.fixture
def organization(session: Session) -> Organization:
    org = Organization(name="Centre Elite", slug=f"centre-{uuid4().hex[:8]}", hours=CENTER_HOURS)
    session.add(org)
    session.commit()
    session.refresh(org)
    return org


@pytest.fixture
def room(session: Session, organization: Organization) -> Room:
    room = Room(
        organization_id=organization.id,
        name="Salle A",
        capacity=12,
        hourly_rate=Decimal("80.00"),
    )
    session.add(room)
    session.commit()
    session.refresh(room)
    return room


@pytest.fixture
def owner(session: Session, organization: Organization) -> User:
    user = _create_user(session, "CENTER_OWNER")
    session.add(OrganizationMember(user_id=user.id, organization_id=organization.id, role="OWNER"))
    session.commit()
    return user


@pytest.fixture
def teacher(session: Session) -> User:
    return _create_user(session, "TEACHER")


@pytest.fixture
def other_teacher(session: Session) -> User:
    return _create_user(session, "TEACHER")


@pytest.fixture
def admin(session: Session) -> User:
    return _create_user(session, "ADMIN")


@pytest.fixture
def owner_headers(owner: User) -> dict[str, str]:
    return auth_headers(owner)


@pytest.fixture
def teacher_headers(teacher: User) -> dict[str, str]:
    return auth_headers(teacher)


@pytest.fixture
def other_teacher_headers(other_teacher: User) -> dict[str, str]:
    return auth_headers(other_teacher)


@pytest.fixture
def admin_headers(admin: User) -> dict[str, str]:
    return auth_headers(admin)


@pytest.fixture
def book(client, room):
    """POST a booking for ``room`` and return the response."""

    def _book(headers, start, end, day=MONDAY, **extra):
        payload = {
            "organization_id": str(room.organization_id),
            "room_id": str(room.id),
            "date": day.isoformat(),
            "start_time": start,
            "end_time": end,
            **extra,
        }
        return client.post("/api/v1/bookings/", json=payload, headers=headers)

    return _book
