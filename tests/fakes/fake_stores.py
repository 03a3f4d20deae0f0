"""In-memory collaborator stores for deterministic engine tests."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from itertools import count

from preparer_booking.models.appointment import (
    ACTIVE_STATUSES,
    SCHEDULE_STATUSES,
    Appointment,
    AppointmentStatus,
)
from preparer_booking.models.availability import PreparerAvailability, RuleKind
from preparer_booking.models.booking_service import BookingService
from preparer_booking.models.preparer import Preparer
from preparer_booking.services.availability.stores import day_of_week_index

_ids = count(100)

# 2024-12-23 is a Monday, 2024-12-26 a Thursday; NOW is well before both
MONDAY = date(2024, 12, 23)
THURSDAY = date(2024, 12, 26)
NOW = datetime(2024, 12, 1, 8, 0)

# day_of_week values, 0=Sunday
MON = 1
THU = 4


def make_preparer(**overrides) -> Preparer:
    values = {"id": next(_ids), "first_name": "Ada", "last_name": "Lovelace"}
    values.update(overrides)
    return Preparer(**values)


def weekly_rule(preparer_id: int, day_of_week: int, start: time, end: time, **overrides) -> PreparerAvailability:
    return PreparerAvailability(
        id=overrides.pop("id", next(_ids)),
        preparer_id=preparer_id,
        day_of_week=day_of_week,
        start_time=start,
        end_time=end,
        **overrides,
    )


def override_rule(
    preparer_id: int, first: date, last: date, start: time, end: time, **overrides
) -> PreparerAvailability:
    return PreparerAvailability(
        id=overrides.pop("id", next(_ids)),
        preparer_id=preparer_id,
        is_override=True,
        override_from=first,
        override_until=last,
        start_time=start,
        end_time=end,
        **overrides,
    )


def blackout(preparer_id: int, first: date, last: date, **overrides) -> PreparerAvailability:
    """Blackout the way older rows store it: an override from 00:00 to 00:00."""
    return override_rule(preparer_id, first, last, time(0, 0), time(0, 0), **overrides)


def blocked_rule(preparer_id: int, first: date, last: date, **overrides) -> PreparerAvailability:
    return override_rule(
        preparer_id, first, last, time(9, 0), time(17, 0), kind=RuleKind.BLOCKED, **overrides
    )


def make_appointment(preparer_id: int, start: datetime, minutes: int | None = 30, **overrides) -> Appointment:
    values = {
        "id": next(_ids),
        "preparer_id": preparer_id,
        "client_name": "Client",
        "scheduled_for": start,
        "scheduled_end": start + timedelta(minutes=minutes) if minutes is not None else None,
    }
    values.update(overrides)
    return Appointment(**values)


def make_service(**overrides) -> BookingService:
    values = {"id": next(_ids), "name": "Individual return", "buffer_after_minutes": 15}
    values.update(overrides)
    return BookingService(**values)


class FakeAvailabilityStores:
    """Implements AvailabilityStores over plain lists, recording which days were asked for."""

    def __init__(
        self,
        preparers: list[Preparer] | None = None,
        rules: list[PreparerAvailability] | None = None,
        appointments: list[Appointment] | None = None,
        services: list[BookingService] | None = None,
    ) -> None:
        self.preparers = {p.id: p for p in preparers or []}
        self.rules = list(rules or [])
        self.appointments = list(appointments or [])
        self.services = {s.id: s for s in services or []}
        self.rule_days: list[date] = []

    async def get_preparer(self, preparer_id: int) -> Preparer | None:
        return self.preparers.get(preparer_id)

    async def list_rules(self, preparer_id: int, d: date) -> list[PreparerAvailability]:
        self.rule_days.append(d)
        return [
            r
            for r in self.rules
            if r.preparer_id == preparer_id
            and r.is_active
            and (r.covers(d) if r.is_override else r.day_of_week == day_of_week_index(d))
        ]

    async def list_active_appointments(
        self,
        preparer_id: int,
        range_start: datetime,
        range_end: datetime,
        exclude_appointment_id: int | None = None,
    ) -> list[Appointment]:
        return [
            a
            for a in self.appointments
            if a.preparer_id == preparer_id
            and a.status in ACTIVE_STATUSES
            and a.id != exclude_appointment_id
            and a.scheduled_for is not None
            and range_start <= a.scheduled_for < range_end
        ]

    async def get_service(self, service_id: int) -> BookingService | None:
        service = self.services.get(service_id)
        return service if service is not None and service.is_active else None

    async def list_schedule_appointments(
        self, preparer_id: int, start: datetime, end: datetime
    ) -> list[Appointment]:
        found = [
            a
            for a in self.appointments
            if a.preparer_id == preparer_id
            and a.status in SCHEDULE_STATUSES
            and a.scheduled_for is not None
            and start <= a.scheduled_for <= end
        ]
        return sorted(found, key=lambda a: a.scheduled_for)


__all__ = [
    "MON",
    "MONDAY",
    "NOW",
    "THU",
    "THURSDAY",
    "AppointmentStatus",
    "FakeAvailabilityStores",
    "blackout",
    "blocked_rule",
    "make_appointment",
    "make_preparer",
    "make_service",
    "override_rule",
    "weekly_rule",
]
