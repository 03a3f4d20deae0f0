from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from preparer_booking.core.db import get_session
from preparer_booking.services.availability import AvailabilityStores, SqlAvailabilityStores


def get_stores(session: AsyncSession = Depends(get_session)) -> AvailabilityStores:
    """Collaborator stores backed by the request's database session."""
    return SqlAvailabilityStores(session)
