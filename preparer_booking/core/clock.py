from datetime import datetime
from zoneinfo import ZoneInfo

from preparer_booking.core.config import settings


def preparer_zone() -> ZoneInfo:
    return ZoneInfo(settings.timezone)


def to_local_naive(dt: datetime) -> datetime:
    """Convert to naive wall-clock time in the preparer timezone.

    Naive datetimes are assumed to already be local and are returned unchanged.
    """
    if dt.tzinfo is not None:
        return dt.astimezone(preparer_zone()).replace(tzinfo=None)
    return dt


def local_now() -> datetime:
    return datetime.now(preparer_zone()).replace(tzinfo=None)
