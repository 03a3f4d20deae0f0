from datetime import datetime, timedelta
from enum import Enum

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class AppointmentStatus(str, Enum):
    REQUESTED = "REQUESTED"
    SCHEDULED = "SCHEDULED"
    CONFIRMED = "CONFIRMED"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"
    NO_SHOW = "NO_SHOW"


class AppointmentType(str, Enum):
    PHONE_CALL = "PHONE_CALL"
    VIDEO_CALL = "VIDEO_CALL"
    IN_PERSON = "IN_PERSON"
    CONSULTATION = "CONSULTATION"
    FOLLOW_UP = "FOLLOW_UP"


# Statuses that occupy the preparer's calendar
ACTIVE_STATUSES = (
    AppointmentStatus.SCHEDULED,
    AppointmentStatus.CONFIRMED,
    AppointmentStatus.PENDING_APPROVAL,
)
# Statuses shown on the preparer's schedule
SCHEDULE_STATUSES = (*ACTIVE_STATUSES, AppointmentStatus.REQUESTED)


class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    id: int | None = Field(default=None, primary_key=True)
    preparer_id: int = Field(foreign_key="preparers.id", index=True)
    client_name: str
    type: AppointmentType = AppointmentType.CONSULTATION
    subject: str | None = None
    # Naive wall-clock columns, matching sa.DateTime() in the migration
    scheduled_for: datetime | None = Field(default=None, index=True, sa_type=DateTime)
    scheduled_end: datetime | None = Field(default=None, sa_type=DateTime)
    duration_minutes: int | None = None
    status: AppointmentStatus = AppointmentStatus.SCHEDULED

    @property
    def effective_end(self) -> datetime | None:
        """Explicit end, or start + duration when no end was stored."""
        if self.scheduled_end is not None:
            return self.scheduled_end
        if self.scheduled_for is not None and self.duration_minutes:
            return self.scheduled_for + timedelta(minutes=self.duration_minutes)
        return None


class AppointmentPublic(SQLModel):
    id: int
    client_name: str
    type: AppointmentType
    subject: str | None = None
    scheduled_for: datetime
    scheduled_end: datetime
    status: AppointmentStatus
