"""
Conflict resolution: moves movable events out of the way of whatever already
holds the time, one day bucket at a time.
"""

import logging
from typing import List, Optional, Tuple

from weekplanner.config import DAY_END, DAY_START
from ..core.constants import MIN_EVENT_MINUTES, MINUTES_PER_DAY
from ..core.models import FLEXIBILITY_RANK, ConflictNote, ConflictStatus, Event, Resolution
from ..core.time_slot import TimeSlot
from ..scoring.time_scoring import classify_preferred_window
from ..utils.day_utils import bucket_events_by_day
from ..utils.slot_utils import find_forward_slot, slots_for_events
from ..utils.time_utils import format_range, to_minutes, to_time

logger = logging.getLogger(__name__)

FIXED_REASON = "fixed time could not be moved"
NO_SLOT_REASON = "no free slot same day within hours"
MOVED_AROUND_FIXED = "moved to avoid fixed event"
MOVED_TO_NEXT_SLOT = "moved to next available slot"


def processing_key(event: Event, index: int) -> Tuple[int, int, int]:
    """
    Order in which a day's events claim time: least movable first, then by
    start time, then by input position.
    """
    return (FLEXIBILITY_RANK[event.flexibility], event.start_minutes, index)


def overlaps(event: Event, other: Event) -> bool:
    return max(event.start_minutes, other.start_minutes) < min(event.end_minutes, other.end_minutes)


def find_relocation_slot(event: Event, placed: List[Event], day_start: int, day_end: int) -> Tuple[Optional[TimeSlot], bool]:
    """
    Three-phase forward search for a new slot on the same day:
    1. inside the preferred window, not earlier than the original start
    2. anywhere later in the day
    3. anywhere in the day
    Returns (slot, outside_preferred) or (None, False).
    """
    start = event.start_minutes
    duration = max(event.end_minutes - start, MIN_EVENT_MINUTES)
    window = classify_preferred_window(event.title)
    occupied = slots_for_events(placed)

    preferred_start = window.start if window else day_start
    preferred_end = window.end if window else day_end
    phases = [
        (max(start, preferred_start, day_start), preferred_end, False),
        (max(start, day_start), day_end, window is not None),
        (day_start, day_end, window is not None),
    ]

    for phase, (search_start, end_limit, outside_preferred) in enumerate(phases, 1):
        slot = find_forward_slot(occupied, duration, search_start, end_limit)
        if slot:
            logger.debug(f"'{event.title}' fits at {to_time(slot.start)} in phase {phase}")
            return slot, outside_preferred

    return None, False


def resolve_day(day_label: str, events: List[Event], day_start: int, day_end: int) -> Tuple[List[Event], List[ConflictNote]]:
    """
    Resolve one day bucket. Events are accepted in processing order; an event
    that overlaps anything accepted before it is relocated if movable, or
    flagged unresolved and kept where it is.
    """
    ordered = [event for index, event in sorted(enumerate(events), key=lambda pair: processing_key(pair[1], pair[0]))]
    placed: List[Event] = []
    notes: List[ConflictNote] = []

    for event in ordered:
        overlapping = [other for other in placed if overlaps(event, other)]
        if not overlapping:
            placed.append(event)
            continue

        original_time = format_range(event.start_minutes, event.end_minutes)

        if event.is_fixed:
            notes.append(ConflictNote(
                title=event.title,
                date_label=day_label,
                original_time=original_time,
                status=ConflictStatus.UNRESOLVED,
                reason=FIXED_REASON,
                conflicts_with=overlapping[0].title,
            ))
            logger.warning(f"Fixed event '{event.title}' on {day_label} clashes with '{overlapping[0].title}'")
            placed.append(event)
            continue

        slot, outside_preferred = find_relocation_slot(event, placed, day_start, day_end)

        if slot:
            moved = event.model_copy(update={"start": to_time(slot.start), "end": to_time(slot.end)})
            hit_fixed = any(other.is_fixed for other in overlapping)
            notes.append(ConflictNote(
                title=event.title,
                date_label=day_label,
                original_time=original_time,
                new_time=format_range(slot.start, slot.end),
                status=ConflictStatus.RESOLVED,
                reason=MOVED_AROUND_FIXED if hit_fixed else MOVED_TO_NEXT_SLOT,
                outside_preferred=outside_preferred,
                conflicts_with=overlapping[0].title,
            ))
            placed.append(moved)
        else:
            notes.append(ConflictNote(
                title=event.title,
                date_label=day_label,
                original_time=original_time,
                status=ConflictStatus.UNRESOLVED,
                reason=NO_SLOT_REASON,
                conflicts_with=overlapping[0].title,
            ))
            logger.warning(f"No free slot for '{event.title}' on {day_label}")
            placed.append(event)

    return placed, notes


def resolve_conflicts(events: List[Event], day_start: str = None, day_end: str = None) -> Resolution:
    """
    Resolve overlaps in every day bucket independently. Buckets are processed
    in order of first appearance; fixed events are never moved.
    """
    start_minutes = to_minutes(day_start or DAY_START)
    end_minutes = min(to_minutes(day_end or DAY_END), MINUTES_PER_DAY)

    resolved: List[Event] = []
    notes: List[ConflictNote] = []

    for day_label, day_events in bucket_events_by_day(events):
        placed, day_notes = resolve_day(day_label, day_events, start_minutes, end_minutes)
        resolved.extend(placed)
        notes.extend(day_notes)

    resolution = Resolution(events=resolved, notes=notes)
    logger.info(
        f"Resolved {len(events)} events: {len(notes)} conflicts, "
        f"unresolved={resolution.has_unresolved}"
    )
    return resolution
