from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from sqlmodel import Session

from roomhub.core.cache import get_cache, hours_cache_key
from roomhub.models import Organization

logger = logging.getLogger(__name__)


def get_organization_hours(session: Session, organization_id: UUID) -> Optional[dict]:
    """Operating hours of an organization, read through the hours cache.

    ``None`` means the organization has no hours configured.
    """
    cache = get_cache()
    key = hours_cache_key(organization_id)
    cached = cache.get(key)
    if isinstance(cached, dict):
        return cached or None

    organization = session.get(Organization, organization_id)
    hours = organization.hours if organization else None
    cache.set(key, hours or {})
    logger.debug("Loaded hours for organization %s from the database", organization_id)
    return hours or None
