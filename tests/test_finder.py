from datetime import date, datetime, time, timedelta

import pytest

from preparer_booking.services.availability import NEXT_AVAILABLE_SCAN_DAYS, get_next_available_slot
from tests.conftest import PREPARER_ID
from tests.fakes.fake_stores import (
    MON,
    MONDAY,
    NOW,
    make_appointment,
    make_preparer,
    override_rule,
    weekly_rule,
)


@pytest.mark.asyncio
async def test_finds_first_slot_on_next_open_day(stores) -> None:
    stores.rules.append(weekly_rule(PREPARER_ID, MON, time(9), time(17)))

    slot = await get_next_available_slot(stores, PREPARER_ID, 60, start_from=date(2024, 12, 19), now=NOW)

    assert slot is not None
    assert slot.start == datetime.combine(MONDAY, time(9))
    assert slot.end == datetime.combine(MONDAY, time(10))
    assert stores.rule_days[0] == date(2024, 12, 19)


@pytest.mark.asyncio
async def test_skips_booked_time(stores) -> None:
    stores.rules.append(weekly_rule(PREPARER_ID, MON, time(9), time(11)))
    stores.appointments.append(make_appointment(PREPARER_ID, datetime.combine(MONDAY, time(9)), 120))

    slot = await get_next_available_slot(stores, PREPARER_ID, 60, start_from=MONDAY, now=NOW)

    assert slot is not None
    assert slot.start == datetime.combine(MONDAY + timedelta(days=7), time(9))


@pytest.mark.asyncio
async def test_datetime_start_skips_earlier_slots(stores) -> None:
    stores.rules.append(weekly_rule(PREPARER_ID, MON, time(9), time(17)))

    slot = await get_next_available_slot(
        stores, PREPARER_ID, 60, start_from=datetime.combine(MONDAY, time(11, 10)), now=NOW
    )

    assert slot is not None
    assert slot.start_time == "11:30"


@pytest.mark.asyncio
async def test_defaults_to_now(stores) -> None:
    stores.rules.append(weekly_rule(PREPARER_ID, MON, time(9), time(17)))

    slot = await get_next_available_slot(stores, PREPARER_ID, 60, now=datetime.combine(MONDAY, time(9, 40)))

    assert slot is not None
    assert slot.start == datetime.combine(MONDAY, time(10))


@pytest.mark.asyncio
async def test_scan_is_bounded(stores) -> None:
    first_day = date(2024, 12, 1)
    beyond = first_day + timedelta(days=NEXT_AVAILABLE_SCAN_DAYS)
    stores.rules.append(override_rule(PREPARER_ID, beyond, beyond, time(9), time(17)))

    slot = await get_next_available_slot(stores, PREPARER_ID, 60, start_from=first_day, now=NOW)

    assert slot is None
    assert NEXT_AVAILABLE_SCAN_DAYS == 30
    assert len(stores.rule_days) == NEXT_AVAILABLE_SCAN_DAYS
    assert max(stores.rule_days) == beyond - timedelta(days=1)


@pytest.mark.asyncio
async def test_last_day_of_window_is_scanned(stores) -> None:
    first_day = date(2024, 12, 1)
    last = first_day + timedelta(days=NEXT_AVAILABLE_SCAN_DAYS - 1)
    stores.rules.append(override_rule(PREPARER_ID, last, last, time(9), time(10)))

    slot = await get_next_available_slot(stores, PREPARER_ID, 60, start_from=first_day, now=NOW)

    assert slot is not None
    assert slot.start.date() == last


@pytest.mark.asyncio
async def test_disabled_preparer_is_not_scanned(stores) -> None:
    closed = make_preparer(booking_enabled=False)
    stores.preparers[closed.id] = closed
    stores.rules.append(weekly_rule(closed.id, MON, time(9), time(17)))

    assert await get_next_available_slot(stores, closed.id, 60, start_from=MONDAY, now=NOW) is None
    assert stores.rule_days == []
