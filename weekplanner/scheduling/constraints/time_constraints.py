"""
Time-related constraint checking functions.
"""

import logging
from typing import List

from ..core.constants import MIN_EVENT_MINUTES, MINUTES_PER_DAY
from ..core.models import Event, InvalidEventError
from ..core.time_slot import TimeSlot
from ..utils.time_utils import to_minutes, to_time

logger = logging.getLogger(__name__)


def normalize_event(event: Event) -> Event:
    """
    Return a copy of the event whose window lies inside the calendar day and
    lasts at least MIN_EVENT_MINUTES. Non-chronological windows are rejected.
    """
    start = to_minutes(event.start)
    end = to_minutes(event.end)

    if start >= MINUTES_PER_DAY:
        raise InvalidEventError(f"'{event.title}' starts outside the day ({event.start})")
    if end < start:
        raise InvalidEventError(f"'{event.title}' ends before it starts ({event.start}-{event.end})")

    end = min(max(end, start + MIN_EVENT_MINUTES), MINUTES_PER_DAY)
    return event.model_copy(update={"start": to_time(start), "end": to_time(end)})


def respects_quiet_hours(start: int, end: int, quiet_start: int, quiet_end: int) -> bool:
    """Quiet hours run from quiet_start in the evening to quiet_end in the morning."""
    return start >= quiet_end and end <= quiet_start


def has_buffered_conflict(occupied: List[TimeSlot], start: int, end: int, buffer_minutes: int) -> bool:
    """True if [start, end) comes within buffer_minutes of any occupied slot."""
    return any(
        start < slot.end + buffer_minutes and end + buffer_minutes > slot.start
        for slot in occupied
    )


def fits_daily_cap(study_minutes: int, block_minutes: int, cap_minutes: float) -> bool:
    return study_minutes + block_minutes <= cap_minutes


def is_study_slot_allowed(start: int, end: int, occupied: List[TimeSlot], quiet_start: int, quiet_end: int,
                          buffer_minutes: int) -> bool:
    """
    Check a candidate study block against the hard rules of the urgency planner.
    """
    # Rule 1: stay inside waking hours
    if not respects_quiet_hours(start, end, quiet_start, quiet_end):
        logger.debug(f"Slot {to_time(start)}-{to_time(end)} rejected: quiet hours")
        return False

    # Rule 2: keep a buffer around everything already on the day
    if has_buffered_conflict(occupied, start, end, buffer_minutes):
        logger.debug(f"Slot {to_time(start)}-{to_time(end)} rejected: overlaps with buffer")
        return False

    return True
