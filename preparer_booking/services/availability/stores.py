"""
Read-only collaborators of the availability engine.

The engine only talks to the AvailabilityStores protocol; SqlAvailabilityStores
is the implementation used by the API, reading the tables through one AsyncSession.
"""

from datetime import date, datetime
from typing import Protocol

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from preparer_booking.models.appointment import ACTIVE_STATUSES, SCHEDULE_STATUSES, Appointment
from preparer_booking.models.availability import PreparerAvailability
from preparer_booking.models.booking_service import BookingService
from preparer_booking.models.preparer import Preparer


def day_of_week_index(d: date) -> int:
    """0=Sunday ... 6=Saturday."""
    return (d.weekday() + 1) % 7


class AvailabilityStores(Protocol):
    async def get_preparer(self, preparer_id: int) -> Preparer | None: ...

    async def list_rules(self, preparer_id: int, d: date) -> list[PreparerAvailability]:
        """Active regular rules for the weekday of d plus active overrides covering d."""
        ...

    async def list_active_appointments(
        self,
        preparer_id: int,
        range_start: datetime,
        range_end: datetime,
        exclude_appointment_id: int | None = None,
    ) -> list[Appointment]:
        """Appointments in an active status starting in [range_start, range_end)."""
        ...

    async def get_service(self, service_id: int) -> BookingService | None: ...

    async def list_schedule_appointments(
        self, preparer_id: int, start: datetime, end: datetime
    ) -> list[Appointment]: ...


class SqlAvailabilityStores:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_preparer(self, preparer_id: int) -> Preparer | None:
        result = await self.session.execute(select(Preparer).where(Preparer.id == preparer_id))
        return result.scalar_one_or_none()

    async def list_rules(self, preparer_id: int, d: date) -> list[PreparerAvailability]:
        result = await self.session.execute(
            select(PreparerAvailability).where(
                PreparerAvailability.preparer_id == preparer_id,
                PreparerAvailability.is_active == True,  # noqa: E712
                or_(
                    and_(
                        PreparerAvailability.is_override == False,  # noqa: E712
                        PreparerAvailability.day_of_week == day_of_week_index(d),
                    ),
                    and_(
                        PreparerAvailability.is_override == True,  # noqa: E712
                        PreparerAvailability.override_from <= d,
                        PreparerAvailability.override_until >= d,
                    ),
                ),
            )
        )
        return list(result.scalars().all())

    async def list_active_appointments(
        self,
        preparer_id: int,
        range_start: datetime,
        range_end: datetime,
        exclude_appointment_id: int | None = None,
    ) -> list[Appointment]:
        q = select(Appointment).where(
            Appointment.preparer_id == preparer_id,
            Appointment.scheduled_for >= range_start,
            Appointment.scheduled_for < range_end,
            Appointment.status.in_(ACTIVE_STATUSES),
        )
        if exclude_appointment_id is not None:
            q = q.where(Appointment.id != exclude_appointment_id)
        result = await self.session.execute(q)
        return list(result.scalars().all())

    async def get_service(self, service_id: int) -> BookingService | None:
        result = await self.session.execute(
            select(BookingService).where(
                BookingService.id == service_id,
                BookingService.is_active == True,  # noqa: E712
            )
        )
        return result.scalar_one_or_none()

    async def list_schedule_appointments(
        self, preparer_id: int, start: datetime, end: datetime
    ) -> list[Appointment]:
        result = await self.session.execute(
            select(Appointment)
            .where(
                Appointment.preparer_id == preparer_id,
                Appointment.scheduled_for >= start,
                Appointment.scheduled_for <= end,
                Appointment.status.in_(SCHEDULE_STATUSES),
            )
            .order_by(Appointment.scheduled_for)
        )
        return list(result.scalars().all())
