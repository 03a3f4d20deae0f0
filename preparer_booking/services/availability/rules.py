"""
Rule resolution: which availability windows apply to a preparer on one date.

Resolution runs in two stages over the rules fetched for the date:
1. blackout absorption: any Blocked override covering the date empties the day
2. precedence: override windows replace the regular weekly windows
Service restrictions are applied afterwards by restrict_to_service.
"""

import logging
from datetime import date, time

from preparer_booking.models.availability import PreparerAvailability, RuleKind
from preparer_booking.models.booking_service import BookingService
from preparer_booking.services.availability.stores import AvailabilityStores, day_of_week_index
from preparer_booking.services.availability.types import Blocked, OpenWindow, Window

logger = logging.getLogger(__name__)

MIDNIGHT = time(0, 0)


def to_window(rule: PreparerAvailability) -> Window | None:
    """Convert a stored rule to a Window; None for rows that break the start < end invariant.

    Older rows mark a blackout with start = end = 00:00 instead of kind=BLOCKED.
    """
    is_sentinel = rule.start_time == MIDNIGHT and rule.end_time == MIDNIGHT
    if rule.kind == RuleKind.BLOCKED or is_sentinel:
        if not rule.is_override:
            logger.warning("Ignoring blackout on regular rule %s: blackouts need a date range", rule.id)
            return None
        return Blocked(rule_id=rule.id)
    if rule.start_time >= rule.end_time:
        logger.warning(
            "Ignoring availability rule %s: start %s is not before end %s",
            rule.id,
            rule.start_time,
            rule.end_time,
        )
        return None
    return OpenWindow(
        start=rule.start_time,
        end=rule.end_time,
        service_ids=tuple(rule.service_ids or ()),
        rule_id=rule.id,
        is_override=rule.is_override,
    )


def applies_on(rule: PreparerAvailability, d: date) -> bool:
    if rule.is_override:
        return rule.covers(d)
    return rule.day_of_week == day_of_week_index(d)


def choose_windows(windows: list[Window]) -> list[OpenWindow]:
    if any(isinstance(w, Blocked) for w in windows):
        return []
    open_windows = [w for w in windows if isinstance(w, OpenWindow)]
    overrides = [w for w in open_windows if w.is_override]
    if overrides:
        return overrides
    return [w for w in open_windows if not w.is_override]


def restrict_to_service(
    windows: list[OpenWindow], service_id: int | None, service: BookingService | None = None
) -> list[OpenWindow]:
    """Keep the windows in which service_id may be booked. No service id keeps everything."""
    if service_id is None:
        return list(windows)
    allowed_rules = set(service.availability_rule_ids) if service is not None else set()
    return [
        w
        for w in windows
        if w.admits(service_id) and (not allowed_rules or w.rule_id in allowed_rules)
    ]


async def windows_for_day(stores: AvailabilityStores, preparer_id: int, d: date) -> list[OpenWindow]:
    rules = await stores.list_rules(preparer_id, d)
    windows = []
    for rule in rules:
        if not rule.is_active or not applies_on(rule, d):
            continue
        window = to_window(rule)
        if window is not None:
            windows.append(window)
    return choose_windows(windows)
