"""Account sign-up and sign-in for people who book rooms.

Center staff accounts are provisioned by an admin (see ``scripts/seed_demo.py``);
self-service sign-up only creates TEACHER and PARTNER accounts.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from sqlmodel import select

from roomhub.core.security import check_password, hash_password, issue_access_token
from roomhub.db import SessionDep
from roomhub.models import User
from roomhub.schemas import AccessToken, UserCreate, UserLogin, UserRead

logger = logging.getLogger(__name__)

router = APIRouter()


def _find_by_email(session: SessionDep, email: str) -> User | None:
    return session.exec(select(User).where(User.email == email.lower())).one_or_none()


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up as a teacher or partner",
)
def register(payload: UserCreate, session: SessionDep) -> User:
    if _find_by_email(session, payload.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email is already registered")

    user = User(
        email=payload.email.lower(),
        full_name=payload.full_name,
        phone=payload.phone,
        hashed_password=hash_password(payload.password),
        role=payload.role,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("Registered %s account %s", user.role, user.id)
    return user


@router.post("/login", response_model=AccessToken, summary="Obtain a bearer token")
def login(payload: UserLogin, session: SessionDep) -> AccessToken:
    user = _find_by_email(session, payload.email)
    if not user or not check_password(payload.password, user.hashed_password):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Incorrect email or password")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User is inactive")

    token, lifetime = issue_access_token(user.id, user.role)
    return AccessToken(access_token=token, expires_in=lifetime, role=user.role)
