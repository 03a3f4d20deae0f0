from datetime import datetime

from preparer_booking.models.appointment import AppointmentPublic
from preparer_booking.services.availability.stores import AvailabilityStores
from preparer_booking.services.availability.types import PreparerSchedule


async def get_preparer_schedule(
    stores: AvailabilityStores, preparer_id: int, start: datetime, end: datetime
) -> PreparerSchedule | None:
    """Appointments of a preparer starting between start and end (inclusive). None for an unknown preparer."""
    preparer = await stores.get_preparer(preparer_id)
    if preparer is None:
        return None
    appointments = await stores.list_schedule_appointments(preparer_id, start, end)
    return PreparerSchedule(
        preparer_id=preparer_id,
        preparer_name=preparer.full_name,
        appointments=[
            AppointmentPublic(
                id=a.id,
                client_name=a.client_name,
                type=a.type,
                subject=a.subject,
                scheduled_for=a.scheduled_for,
                scheduled_end=a.effective_end,
                status=a.status,
            )
            for a in appointments
            # Unscheduled requests have no slot on the calendar yet
            if a.scheduled_for is not None and a.effective_end is not None
        ],
    )
