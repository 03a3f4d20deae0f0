from datetime import datetime

from pydantic import BaseModel, Field

from preparer_booking.models.appointment import AppointmentType
from preparer_booking.services.availability import TimeSlot


class AvailableSlotsResponse(BaseModel):
    date: str  # YYYY-MM-DD
    preparer_id: int
    duration_minutes: int
    slots: list[TimeSlot]


class NextSlotResponse(BaseModel):
    slot: TimeSlot | None = None


class ConflictResponse(BaseModel):
    has_conflict: bool


class ValidateBookingRequest(BaseModel):
    start: datetime
    duration_minutes: int = Field(30, gt=0)
    service_id: int | None = None
    appointment_type: AppointmentType | None = None
