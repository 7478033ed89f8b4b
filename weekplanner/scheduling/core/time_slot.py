"""
Time slot representation for the scheduling system.
"""

from typing import Any

from .constants import AVAILABLE
from ..utils.time_utils import to_time


class TimeSlot:
    """
    A window inside a single day, in minutes since midnight:
    - Free time (with occupant=AVAILABLE)
    - Time claimed by an event (with occupant=the Event)
    """
    def __init__(self, start: int, end: int, occupant: Any = AVAILABLE):
        self.start = start
        self.end = end
        self.occupant = occupant

    def duration(self) -> int:
        return self.end - self.start

    def overlaps(self, start: int, end: int) -> bool:
        """Half-open intersection test."""
        return max(self.start, start) < min(self.end, end)

    def __eq__(self, other):
        if not isinstance(other, TimeSlot):
            return NotImplemented
        return (self.start, self.end, self.occupant) == (other.start, other.end, other.occupant)

    def __lt__(self, other):
        return self.start < other.start

    def __repr__(self):
        if self.occupant == AVAILABLE:
            return f"AvailableSlot({to_time(self.start)} - {to_time(self.end)})"
        occupant_name = getattr(self.occupant, 'title', str(self.occupant))
        return f"EventSlot({to_time(self.start)} - {to_time(self.end)}, {occupant_name})"
