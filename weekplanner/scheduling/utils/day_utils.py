"""
Day addressing helpers. Recurring events carry a weekday symbol, one-off events
carry a calendar date; both collapse into a single day key for conflict search.
"""

from typing import Dict, List, Tuple

from dateutil import parser as date_parser

from ..core.constants import DAYS, UNSPECIFIED_DAY
from ..core.models import Event


def day_key(event: Event) -> str:
    """Concrete date if present, else weekday symbol, else the unspecified sentinel."""
    if event.date:
        return event.date
    if event.day is not None:
        return event.day.value
    return UNSPECIFIED_DAY


def bucket_events_by_day(events: List[Event]) -> List[Tuple[str, List[Event]]]:
    """
    Group events by day key. Buckets come back in order of first occurrence and
    keep the input order of their events.
    """
    groups: Dict[str, List[Event]] = {}
    for event in events:
        groups.setdefault(day_key(event), []).append(event)
    return list(groups.items())


def weekday_of(date_str: str) -> str:
    """Weekday symbol for an ISO date ("2024-12-23" -> "Mon")."""
    return DAYS[date_parser.isoparse(date_str).weekday()]


def events_on_weekday(events: List[Event], day: str) -> List[Event]:
    """Events addressed by the given weekday symbol (dated events are not included)."""
    return [event for event in events if event.day is not None and event.day.value == day]
