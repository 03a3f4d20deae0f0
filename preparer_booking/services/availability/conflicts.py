import logging
from collections.abc import Iterable
from datetime import date, datetime, time, timedelta

from preparer_booking.core.clock import to_local_naive
from preparer_booking.models.appointment import ACTIVE_STATUSES, Appointment
from preparer_booking.models.booking_service import BookingService
from preparer_booking.services.availability.stores import AvailabilityStores

logger = logging.getLogger(__name__)

# Buffer after an appointment when the service is not given or not in the catalog.
# Same value as the booking_services.buffer_after_minutes column default.
DEFAULT_BUFFER_AFTER_MINUTES = 15

# Appointments starting this long before a range can still reach into it
APPOINTMENT_LOOKBACK = timedelta(days=1)


def buffer_after(service: BookingService | None) -> timedelta:
    if service is None:
        return timedelta(minutes=DEFAULT_BUFFER_AFTER_MINUTES)
    return timedelta(minutes=service.buffer_after_minutes)


async def load_service(stores: AvailabilityStores, service_id: int | None) -> BookingService | None:
    if service_id is None:
        return None
    service = await stores.get_service(service_id)
    if service is None:
        logger.debug(
            "Service %s not in catalog, using default buffer of %d minutes",
            service_id,
            DEFAULT_BUFFER_AFTER_MINUTES,
        )
    return service


def overlaps(start: datetime, end: datetime, other_start: datetime, other_end: datetime) -> bool:
    """Half-open interval overlap; intervals that only touch do not overlap."""
    return start < other_end and end > other_start


def blocking_window(appointment: Appointment, buffer: timedelta) -> tuple[datetime, datetime] | None:
    end = appointment.effective_end
    if appointment.scheduled_for is None or end is None:
        return None
    return appointment.scheduled_for, end + buffer


def conflicts_with(
    start: datetime, end: datetime, appointments: Iterable[Appointment], buffer: timedelta
) -> bool:
    for appointment in appointments:
        if appointment.status not in ACTIVE_STATUSES:
            continue
        window = blocking_window(appointment, buffer)
        if window is not None and overlaps(start, end, *window):
            return True
    return False


def day_range(d: date) -> tuple[datetime, datetime]:
    day_start = datetime.combine(d, time.min)
    return day_start - APPOINTMENT_LOOKBACK, day_start + timedelta(days=1)


async def has_buffered_conflict(
    stores: AvailabilityStores,
    preparer_id: int,
    start: datetime,
    end: datetime,
    buffer: timedelta,
    exclude_appointment_id: int | None = None,
) -> bool:
    appointments = await stores.list_active_appointments(
        preparer_id, start - APPOINTMENT_LOOKBACK, end, exclude_appointment_id
    )
    return conflicts_with(start, end, appointments, buffer)


async def check_conflicts(
    stores: AvailabilityStores,
    preparer_id: int,
    start: datetime,
    end: datetime,
    exclude_appointment_id: int | None = None,
    service_id: int | None = None,
) -> bool:
    """True when [start, end) overlaps an active appointment of the preparer plus its buffer.

    exclude_appointment_id lets an appointment being edited be checked against the others.
    """
    service = await load_service(stores, service_id)
    return await has_buffered_conflict(
        stores,
        preparer_id,
        to_local_naive(start),
        to_local_naive(end),
        buffer_after(service),
        exclude_appointment_id,
    )
