import logging
from datetime import date, datetime, timedelta

from preparer_booking.core.clock import local_now, to_local_naive
from preparer_booking.services.availability.slots import calculate_available_slots, check_duration
from preparer_booking.services.availability.stores import AvailabilityStores
from preparer_booking.services.availability.types import TimeSlot

logger = logging.getLogger(__name__)

# Calendar days checked before giving up, counting the start day
NEXT_AVAILABLE_SCAN_DAYS = 30


async def get_next_available_slot(
    stores: AvailabilityStores,
    preparer_id: int,
    duration_minutes: int,
    service_id: int | None = None,
    start_from: date | datetime | None = None,
    now: datetime | None = None,
) -> TimeSlot | None:
    """First open slot from start_from onwards, or None within NEXT_AVAILABLE_SCAN_DAYS days.

    A datetime start_from (the default is now) also skips earlier slots of its own day.
    """
    check_duration(duration_minutes)
    now = to_local_naive(now) if now is not None else local_now()
    if start_from is None:
        start_from = now

    not_before: datetime | None = None
    if isinstance(start_from, datetime):
        not_before = to_local_naive(start_from)
        first_day = not_before.date()
    else:
        first_day = start_from

    preparer = await stores.get_preparer(preparer_id)
    if preparer is None or not preparer.booking_enabled:
        return None

    for offset in range(NEXT_AVAILABLE_SCAN_DAYS):
        day = first_day + timedelta(days=offset)
        slots = await calculate_available_slots(
            stores, preparer_id, day, duration_minutes, service_id, now=now
        )
        for slot in slots:
            if not_before is None or slot.start >= not_before:
                return slot

    logger.info(
        "No open %d-minute slot for preparer %s within %d days of %s",
        duration_minutes,
        preparer_id,
        NEXT_AVAILABLE_SCAN_DAYS,
        first_day,
    )
    return None
