"""Request-scoped dependencies: who is booking, and may they act as staff."""

from __future__ import annotations

from typing import Annotated, Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from roomhub.core.config import settings
from roomhub.core.security import read_access_token
from roomhub.db import SessionDep
from roomhub.models import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(session: SessionDep, token: str = Depends(oauth2_scheme)) -> User:
    try:
        user_id, role = read_access_token(token)
    except ValueError:
        raise _unauthorized("Could not validate credentials") from None

    user = session.get(User, user_id)
    if not user or not user.is_active:
        raise _unauthorized("Inactive or missing user")
    if user.role != role:
        raise _unauthorized("Account role changed, sign in again")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def require_roles(*roles: str) -> Callable[[User], User]:
    """Dependency admitting only accounts whose role is one of ``roles``."""

    def _checker(user: CurrentUser) -> User:
        if user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires one of the roles: {', '.join(roles)}",
            )
        return user

    return _checker
