"""
Availability calculation for preparer bookings.

Pure computation over the AvailabilityStores collaborators: slot listing,
conflict checks, booking validation and next-slot search. Nothing here writes.
"""

from preparer_booking.services.availability.conflicts import DEFAULT_BUFFER_AFTER_MINUTES, check_conflicts
from preparer_booking.services.availability.finder import NEXT_AVAILABLE_SCAN_DAYS, get_next_available_slot
from preparer_booking.services.availability.schedule import get_preparer_schedule
from preparer_booking.services.availability.slots import calculate_available_slots
from preparer_booking.services.availability.stores import AvailabilityStores, SqlAvailabilityStores
from preparer_booking.services.availability.types import (
    BookingDecision,
    PreparerSchedule,
    RejectionReason,
    TimeSlot,
)
from preparer_booking.services.availability.validation import validate_booking_slot

__all__ = [
    "DEFAULT_BUFFER_AFTER_MINUTES",
    "NEXT_AVAILABLE_SCAN_DAYS",
    "AvailabilityStores",
    "SqlAvailabilityStores",
    "BookingDecision",
    "PreparerSchedule",
    "RejectionReason",
    "TimeSlot",
    "calculate_available_slots",
    "check_conflicts",
    "get_next_available_slot",
    "get_preparer_schedule",
    "validate_booking_slot",
]
