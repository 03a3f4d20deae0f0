from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum

from pydantic import BaseModel

from preparer_booking.models.appointment import AppointmentPublic


@dataclass(frozen=True)
class OpenWindow:
    """Bookable time window of one availability rule."""

    start: time
    end: time
    service_ids: tuple[int, ...] = ()
    rule_id: int | None = None
    is_override: bool = False

    def admits(self, service_id: int | None) -> bool:
        if service_id is None or not self.service_ids:
            return True
        return service_id in self.service_ids

    def bounds(self, d: date) -> tuple[datetime, datetime]:
        return datetime.combine(d, self.start), datetime.combine(d, self.end)

    def contains(self, start: datetime, end: datetime) -> bool:
        window_start, window_end = self.bounds(start.date())
        return window_start <= start and end <= window_end


@dataclass(frozen=True)
class Blocked:
    """Full-day blackout for every date of an override range."""

    rule_id: int | None = None
    is_override: bool = True


Window = OpenWindow | Blocked


class RejectionReason(str, Enum):
    PREPARER_NOT_FOUND = "preparer_not_found"
    BOOKING_DISABLED = "booking_disabled"
    APPOINTMENT_TYPE_NOT_ALLOWED = "appointment_type_not_allowed"
    PAST_TIME = "past_time"
    SLOT_CONFLICT = "slot_conflict"
    OUTSIDE_AVAILABILITY = "outside_availability"
    SERVICE_RESTRICTED = "service_restricted"
    NO_AVAILABILITY_CONFIGURED = "no_availability_configured"


class TimeSlot(BaseModel):
    start: datetime
    end: datetime
    start_time: str  # HH:MM
    end_time: str  # HH:MM
    available: bool
    preparer_id: int
    service_id: int | None = None


class BookingDecision(BaseModel):
    valid: bool
    error: str | None = None
    reason: RejectionReason | None = None
    requires_approval: bool = False

    @classmethod
    def reject(cls, reason: RejectionReason, error: str) -> "BookingDecision":
        return cls(valid=False, error=error, reason=reason)


class PreparerSchedule(BaseModel):
    preparer_id: int
    preparer_name: str
    appointments: list[AppointmentPublic]
