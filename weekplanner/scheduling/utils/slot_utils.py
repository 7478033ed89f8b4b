"""
Gap search primitives over a single day's occupied slots.

find_forward_slot and find_first_gap look alike but are kept apart on purpose:
the first treats its bounds as hard limits for the resolver's multi-phase retry,
the second walks the waking day once for initial study allocation.
"""

import logging
from typing import Iterable, List, Optional

from ..core.models import Event
from ..core.time_slot import TimeSlot

logger = logging.getLogger(__name__)


def slots_for_events(events: Iterable[Event]) -> List[TimeSlot]:
    """Occupied slots for a list of events, in input order."""
    return [TimeSlot(event.start_minutes, event.end_minutes, event) for event in events]


def find_forward_slot(placed: List[TimeSlot], duration: int, search_start: int, end_limit: int) -> Optional[TimeSlot]:
    """
    Earliest slot of `duration` minutes starting at or after `search_start` and
    ending by `end_limit`, walking a cursor past each occupied slot.
    Returns None when the day is full within those bounds.
    """
    cursor = search_start

    for slot in sorted(placed, key=lambda s: s.start):
        if cursor + duration <= slot.start and cursor + duration <= end_limit:
            return TimeSlot(cursor, cursor + duration)
        cursor = max(cursor, slot.end)

    if cursor + duration <= end_limit:
        return TimeSlot(cursor, cursor + duration)

    return None


def find_first_gap(day_slots: List[TimeSlot], wake: int, sleep: int, duration: int) -> Optional[TimeSlot]:
    """
    First gap between wake and sleep that can hold `duration` minutes.
    The returned slot starts at the beginning of that gap.
    """
    current_start = wake

    for slot in sorted(day_slots, key=lambda s: s.start):
        gap_end = min(slot.start, sleep)
        if gap_end - current_start >= duration:
            return TimeSlot(current_start, current_start + duration)
        current_start = max(current_start, slot.end)

    if sleep - current_start >= duration:
        return TimeSlot(current_start, current_start + duration)

    logger.debug(f"No {duration}-minute gap between wake and sleep")
    return None
