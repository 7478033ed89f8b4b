"""
Calendar expansion: applies add/modify/delete/exclude_date actions to an
existing calendar before conflicts are resolved.
"""

import logging
import re
from typing import List, Optional, Tuple

from ..core.models import ActionType, CalendarAction, Day, Event, EventCategory, Flexibility
from ..utils.day_utils import weekday_of

logger = logging.getLogger(__name__)

DEFAULT_START = "09:00"
DEFAULT_END = "10:00"

COURSE_CODE = re.compile(r"^[a-z]{3,4}\s?\d{3}")
FIXED_KEYWORDS = ("class", "lecture", "meeting", "work")


def infer_category(title: str) -> Tuple[EventCategory, str]:
    """(category, source) for a new event, from keywords in its title."""
    lowered = title.lower()
    if "class" in lowered or "lecture" in lowered or COURSE_CODE.match(lowered):
        return EventCategory.COMMITMENT, "class"
    if "study" in lowered or "homework" in lowered:
        return EventCategory.STUDY, "study"
    if "gym" in lowered or "lunch" in lowered:
        return EventCategory.ROUTINE, "custom"
    if "meeting" in lowered:
        return EventCategory.COMMITMENT, "commitment"
    if "work" in lowered or "shift" in lowered:
        return EventCategory.COMMITMENT, "work"
    return EventCategory.ROUTINE, "custom"


def titles_match(event_title: str, action_title: str) -> bool:
    """Loose match: equal, or either title contains the other (case-insensitive)."""
    t1 = event_title.lower()
    t2 = action_title.lower()
    return t1 == t2 or t1 in t2 or t2 in t1


def same_address(event: Event, action: CalendarAction) -> bool:
    if action.day is not None and event.day == action.day:
        return True
    return bool(action.date) and event.date == action.date


def _find_target(calendar: List[Event], action: CalendarAction) -> Optional[int]:
    for index, event in enumerate(calendar):
        if titles_match(event.title, action.title) and same_address(event, action):
            return index
    return None


def _add(calendar: List[Event], action: CalendarAction):
    start = action.start or DEFAULT_START
    end = action.end or DEFAULT_END
    duplicate = any(
        event.title.lower() == action.title.lower()
        and same_address(event, action)
        and event.start == start
        and event.end == end
        for event in calendar
    )
    if duplicate:
        logger.debug(f"Skipping duplicate add for '{action.title}'")
        return

    category, source = infer_category(action.title)
    # One-off dates win over weekday symbols
    address = {"date": action.date} if action.date else {"day": action.day}
    calendar.append(Event(
        title=action.title,
        start=start,
        end=end,
        category=category,
        flexibility=action.flexibility or Flexibility.MEDIUM,
        course=action.title,
        source=source,
        **address,
    ))


def _delete(calendar: List[Event], action: CalendarAction) -> List[Event]:
    def targeted(event: Event) -> bool:
        time_match = event.start == action.start if action.start else True
        return titles_match(event.title, action.title) and same_address(event, action) and time_match

    return [event for event in calendar if not targeted(event)]


def _modify(calendar: List[Event], action: CalendarAction):
    index = _find_target(calendar, action)
    if index is None:
        logger.info(f"No event matches modify action for '{action.title}'")
        return

    changes = {}
    if action.start:
        changes["start"] = action.start
    if action.end:
        changes["end"] = action.end
    if action.flexibility:
        changes["flexibility"] = action.flexibility
    calendar[index] = calendar[index].model_copy(update=changes)


def _exclude_date(calendar: List[Event], action: CalendarAction):
    if not action.date:
        return
    # The recurring event to skip lives on the weekday of the excluded date
    day = action.day or Day(weekday_of(action.date))
    for index, event in enumerate(calendar):
        if titles_match(event.title, action.title) and event.day == day:
            if action.date not in event.excluded_dates:
                calendar[index] = event.model_copy(update={"excluded_dates": event.excluded_dates + [action.date]})
            return


def pin_commitments(event: Event) -> Event:
    """Commitments and anything that reads like class, a meeting or work are fixed."""
    lowered = event.title.lower()
    if event.category == EventCategory.COMMITMENT or any(keyword in lowered for keyword in FIXED_KEYWORDS):
        return event.model_copy(update={"flexibility": Flexibility.FIXED})
    return event


def expand_calendar(actions: List[CalendarAction], calendar: List[Event]) -> List[Event]:
    """Apply actions in order and return the materialized calendar."""
    updated = list(calendar)

    for action in actions:
        if action.type == ActionType.ADD:
            _add(updated, action)
        elif action.type == ActionType.DELETE:
            updated = _delete(updated, action)
        elif action.type == ActionType.MODIFY:
            _modify(updated, action)
        elif action.type == ActionType.EXCLUDE_DATE:
            _exclude_date(updated, action)

    return [pin_commitments(event) for event in updated]
