"""
Slot generation: discrete bookable slots of a preparer for one date.

Candidate slots start at each window start and every slot_step_minutes after it.
The last full-length slot of a window (window end - duration) is always offered,
even when the step grid does not land on it.
"""

import logging
from datetime import date, datetime, timedelta

from preparer_booking.core.clock import local_now, to_local_naive
from preparer_booking.core.config import settings
from preparer_booking.services.availability.conflicts import (
    buffer_after,
    conflicts_with,
    day_range,
    load_service,
)
from preparer_booking.services.availability.rules import restrict_to_service, windows_for_day
from preparer_booking.services.availability.stores import AvailabilityStores
from preparer_booking.services.availability.types import OpenWindow, RejectionReason, TimeSlot

logger = logging.getLogger(__name__)


def check_duration(duration_minutes: int) -> None:
    if duration_minutes <= 0:
        raise ValueError(f"duration_minutes must be positive, got {duration_minutes}")


def generate_slots(
    window: OpenWindow,
    d: date,
    duration_minutes: int,
    now: datetime,
    step_minutes: int | None = None,
) -> list[tuple[datetime, datetime]]:
    """(start, end) pairs of the window on date d, dropping slots that end at or before now."""
    window_start, window_end = window.bounds(d)
    length = timedelta(minutes=duration_minutes)
    step_minutes = step_minutes if step_minutes is not None else settings.slot_step_minutes
    if step_minutes <= 0:
        raise ValueError(f"step_minutes must be positive, got {step_minutes}")
    step = timedelta(minutes=step_minutes)

    starts: list[datetime] = []
    current = window_start
    while current + length <= window_end:
        starts.append(current)
        current += step
    last = window_end - length
    if last >= window_start and (not starts or starts[-1] != last):
        starts.append(last)

    return [(s, s + length) for s in starts if s + length > now]


def _to_time_slot(start: datetime, end: datetime, preparer_id: int, service_id: int | None) -> TimeSlot:
    return TimeSlot(
        start=start,
        end=end,
        start_time=start.strftime("%H:%M"),
        end_time=end.strftime("%H:%M"),
        available=True,
        preparer_id=preparer_id,
        service_id=service_id,
    )


async def calculate_available_slots(
    stores: AvailabilityStores,
    preparer_id: int,
    day: date,
    duration_minutes: int,
    service_id: int | None = None,
    now: datetime | None = None,
) -> list[TimeSlot]:
    """Open slots of a preparer on one date, in chronological order.

    Every "cannot book" outcome (unknown preparer, bookings disabled, no rules,
    blackout, service not offered) yields an empty list.
    """
    check_duration(duration_minutes)
    if isinstance(day, datetime):
        day = to_local_naive(day).date()
    now = to_local_naive(now) if now is not None else local_now()

    preparer = await stores.get_preparer(preparer_id)
    if preparer is None:
        logger.debug("No slots for preparer %s: %s", preparer_id, RejectionReason.PREPARER_NOT_FOUND.value)
        return []
    if not preparer.booking_enabled:
        logger.debug("No slots for preparer %s: %s", preparer_id, RejectionReason.BOOKING_DISABLED.value)
        return []

    windows = await windows_for_day(stores, preparer_id, day)
    if not windows:
        logger.debug(
            "No slots for preparer %s on %s: %s",
            preparer_id,
            day,
            RejectionReason.NO_AVAILABILITY_CONFIGURED.value,
        )
        return []

    service = await load_service(stores, service_id)
    windows = restrict_to_service(windows, service_id, service)
    if not windows:
        logger.debug(
            "No slots for preparer %s on %s: %s (service %s)",
            preparer_id,
            day,
            RejectionReason.SERVICE_RESTRICTED.value,
            service_id,
        )
        return []

    range_start, range_end = day_range(day)
    appointments = await stores.list_active_appointments(preparer_id, range_start, range_end)
    buffer = buffer_after(service)

    candidates = sorted({slot for w in windows for slot in generate_slots(w, day, duration_minutes, now)})
    slots = [
        _to_time_slot(start, end, preparer_id, service_id)
        for start, end in candidates
        if not conflicts_with(start, end, appointments, buffer)
    ]
    logger.debug(
        "Preparer %s on %s: %d of %d candidate slots open",
        preparer_id,
        day,
        len(slots),
        len(candidates),
    )
    return slots
