import logging
from datetime import datetime, timedelta

from preparer_booking.core.clock import local_now, to_local_naive
from preparer_booking.models.appointment import AppointmentType
from preparer_booking.models.preparer import Preparer
from preparer_booking.services.availability.conflicts import (
    buffer_after,
    has_buffered_conflict,
    load_service,
)
from preparer_booking.services.availability.rules import restrict_to_service, windows_for_day
from preparer_booking.services.availability.slots import check_duration
from preparer_booking.services.availability.stores import AvailabilityStores
from preparer_booking.services.availability.types import BookingDecision, RejectionReason

logger = logging.getLogger(__name__)

# Preparer permission flag that each appointment type is booked through
_CHANNEL_FLAG = {
    AppointmentType.PHONE_CALL: "allow_phone_bookings",
    AppointmentType.FOLLOW_UP: "allow_phone_bookings",
    AppointmentType.VIDEO_CALL: "allow_video_bookings",
    AppointmentType.CONSULTATION: "allow_video_bookings",
    AppointmentType.IN_PERSON: "allow_in_person_bookings",
}


def accepts_appointment_type(preparer: Preparer, appointment_type: AppointmentType) -> bool:
    return bool(getattr(preparer, _CHANNEL_FLAG[appointment_type]))


async def validate_booking_slot(
    stores: AvailabilityStores,
    preparer_id: int,
    start: datetime,
    duration_minutes: int,
    service_id: int | None = None,
    appointment_type: AppointmentType | None = None,
    now: datetime | None = None,
) -> BookingDecision:
    """
    Decide whether one appointment request can be booked.

    Checks run in order and the first failure is returned:
    preparer exists and accepts bookings, appointment type allowed, not in the past,
    no conflict with buffered appointments, inside an availability window for the
    date, service admitted by that window. Nothing is written.
    """
    check_duration(duration_minutes)
    start = to_local_naive(start)
    now = to_local_naive(now) if now is not None else local_now()

    preparer = await stores.get_preparer(preparer_id)
    if preparer is None:
        return BookingDecision.reject(RejectionReason.PREPARER_NOT_FOUND, "Preparer not found")
    if not preparer.booking_enabled:
        return BookingDecision.reject(
            RejectionReason.BOOKING_DISABLED, "This preparer is not accepting bookings"
        )

    if appointment_type is not None and not accepts_appointment_type(preparer, appointment_type):
        label = appointment_type.value.replace("_", " ").lower()
        return BookingDecision.reject(
            RejectionReason.APPOINTMENT_TYPE_NOT_ALLOWED,
            f"{preparer.full_name} does not accept {label} appointments",
        )

    if start < now:
        return BookingDecision.reject(RejectionReason.PAST_TIME, "Cannot book appointments in the past")

    end = start + timedelta(minutes=duration_minutes)
    service = await load_service(stores, service_id)
    if await has_buffered_conflict(stores, preparer_id, start, end, buffer_after(service)):
        return BookingDecision.reject(
            RejectionReason.SLOT_CONFLICT, "This time slot is no longer available"
        )

    windows = await windows_for_day(stores, preparer_id, start.date())
    containing = [w for w in windows if w.contains(start, end)]
    if not containing:
        return BookingDecision.reject(
            RejectionReason.OUTSIDE_AVAILABILITY, "Preparer is not available at this time"
        )
    if not restrict_to_service(containing, service_id, service):
        return BookingDecision.reject(
            RejectionReason.SERVICE_RESTRICTED, "This service is not available at this time"
        )

    logger.debug("Booking request for preparer %s at %s accepted", preparer_id, start)
    return BookingDecision(valid=True, requires_approval=preparer.require_approval_for_bookings)
