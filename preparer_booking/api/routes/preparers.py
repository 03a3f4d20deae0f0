from datetime import date, datetime, time

from fastapi import APIRouter, Depends, HTTPException, Query, status

from preparer_booking.api.deps import get_stores
from preparer_booking.api.schemas.availability import (
    AvailableSlotsResponse,
    ConflictResponse,
    NextSlotResponse,
    ValidateBookingRequest,
)
from preparer_booking.core.clock import to_local_naive
from preparer_booking.services.availability import (
    AvailabilityStores,
    BookingDecision,
    PreparerSchedule,
    calculate_available_slots,
    check_conflicts,
    get_next_available_slot,
    get_preparer_schedule,
    validate_booking_slot,
)

router = APIRouter(prefix="/preparers", tags=["availability"])


@router.get("/{preparer_id}/slots", response_model=AvailableSlotsResponse)
async def available_slots(
    preparer_id: int,
    date_param: date = Query(..., alias="date"),
    duration: int = Query(30, gt=0, description="Appointment length in minutes"),
    service_id: int | None = Query(None),
    stores: AvailabilityStores = Depends(get_stores),
) -> AvailableSlotsResponse:
    """Open slots of the preparer on the given date, in the preparer's local time."""
    slots = await calculate_available_slots(stores, preparer_id, date_param, duration, service_id)
    return AvailableSlotsResponse(
        date=date_param.isoformat(),
        preparer_id=preparer_id,
        duration_minutes=duration,
        slots=slots,
    )


@router.get("/{preparer_id}/next-slot", response_model=NextSlotResponse)
async def next_available_slot(
    preparer_id: int,
    duration: int = Query(30, gt=0),
    service_id: int | None = Query(None),
    start_from: datetime | None = Query(None),
    stores: AvailabilityStores = Depends(get_stores),
) -> NextSlotResponse:
    slot = await get_next_available_slot(stores, preparer_id, duration, service_id, start_from)
    return NextSlotResponse(slot=slot)


@router.get("/{preparer_id}/conflicts", response_model=ConflictResponse)
async def conflicts(
    preparer_id: int,
    start: datetime = Query(...),
    end: datetime = Query(...),
    exclude_appointment_id: int | None = Query(None),
    service_id: int | None = Query(None),
    stores: AvailabilityStores = Depends(get_stores),
) -> ConflictResponse:
    if to_local_naive(end) <= to_local_naive(start):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="end must be after start",
        )
    has_conflict = await check_conflicts(
        stores, preparer_id, start, end, exclude_appointment_id, service_id
    )
    return ConflictResponse(has_conflict=has_conflict)


@router.post("/{preparer_id}/validate", response_model=BookingDecision)
async def validate_booking(
    preparer_id: int,
    body: ValidateBookingRequest,
    stores: AvailabilityStores = Depends(get_stores),
) -> BookingDecision:
    """Accept/reject one booking request; a rejection is a normal 200 response with the reason."""
    return await validate_booking_slot(
        stores,
        preparer_id,
        body.start,
        body.duration_minutes,
        service_id=body.service_id,
        appointment_type=body.appointment_type,
    )


@router.get("/{preparer_id}/schedule", response_model=PreparerSchedule)
async def preparer_schedule(
    preparer_id: int,
    start_date: date = Query(...),
    end_date: date = Query(...),
    stores: AvailabilityStores = Depends(get_stores),
) -> PreparerSchedule:
    if end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="end_date must not be before start_date",
        )
    schedule = await get_preparer_schedule(
        stores,
        preparer_id,
        datetime.combine(start_date, time.min),
        datetime.combine(end_date, time.max),
    )
    if schedule is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Preparer not found")
    return schedule
