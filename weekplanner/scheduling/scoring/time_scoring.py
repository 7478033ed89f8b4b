"""
Time-of-day preferences used to bias where items land.
"""

from typing import List, Optional

from ..core.constants import CHRONO_SLOTS, FALLBACK_SLOTS, PREFERRED_WINDOWS
from ..core.models import Chronotype
from ..core.time_slot import TimeSlot
from ..utils.time_utils import to_minutes


def classify_preferred_window(title: str) -> Optional[TimeSlot]:
    """
    Preferred window for an event title, by keyword:
    breakfast 07-10, lunch/brunch 11-15, dinner 17-21, meeting/call 08-20.
    The first matching keyword group wins; other titles get no window.
    """
    lowered = title.lower()
    for keywords, start, end in PREFERRED_WINDOWS:
        if any(keyword in lowered for keyword in keywords):
            return TimeSlot(start, end)
    return None


def candidate_start_times(chrono: Optional[Chronotype]) -> List[int]:
    """Chronotype-preferred start times followed by the fixed fallback list."""
    preferred = CHRONO_SLOTS.get(chrono.value, []) if chrono else []
    return [to_minutes(slot) for slot in preferred + FALLBACK_SLOTS]
