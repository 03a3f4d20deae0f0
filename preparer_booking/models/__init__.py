from preparer_booking.models.preparer import Preparer, PreparerBase
from preparer_booking.models.availability import PreparerAvailability, RuleKind
from preparer_booking.models.appointment import (
    ACTIVE_STATUSES,
    SCHEDULE_STATUSES,
    Appointment,
    AppointmentPublic,
    AppointmentStatus,
    AppointmentType,
)
from preparer_booking.models.booking_service import BookingService

__all__ = [
    "Preparer",
    "PreparerBase",
    "PreparerAvailability",
    "RuleKind",
    "ACTIVE_STATUSES",
    "SCHEDULE_STATUSES",
    "Appointment",
    "AppointmentPublic",
    "AppointmentStatus",
    "AppointmentType",
    "BookingService",
]
