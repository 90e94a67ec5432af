"""Bearer tokens and password hashing for booking attribution.

Tokens are short-lived access tokens only. They carry the account's role so a
token minted before a role change stops working.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import bcrypt
from jose import JWTError, jwt

from roomhub.core.config import settings

logger = logging.getLogger(__name__)


def issue_access_token(user_id: UUID, role: str) -> tuple[str, int]:
    """Return the encoded token and its lifetime in seconds."""
    lifetime = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    now = datetime.now(timezone.utc)
    claims = {"sub": str(user_id), "role": role, "iat": now, "exp": now + lifetime}
    token = jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return token, int(lifetime.total_seconds())


def read_access_token(token: str) -> tuple[UUID, str]:
    """Decode ``token`` into ``(user_id, role)``.

    Raises ``ValueError`` for expired, forged or malformed tokens.
    """
    try:
        claims: dict[str, Any] = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError as exc:
        raise ValueError("Invalid token") from exc
    subject, role = claims.get("sub"), claims.get("role")
    if not subject or not role:
        raise ValueError("Token is missing its subject or role")
    return UUID(subject), role


def hash_password(password: str) -> str:
    # bcrypt ignores everything past 72 bytes
    return bcrypt.hashpw(password.encode("utf-8")[:72], bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8")[:72], hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a bcrypt hash")
        return False
