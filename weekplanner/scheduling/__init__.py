"""
Weekly Scheduling Engine

Deterministic planning and conflict resolution for a week of commitments.
Pure and synchronous: structured events and preferences in, events and notes out.
"""

from .core.scheduler import WeeklyPlanner, plan_week
from .core.time_slot import TimeSlot
from .core.constants import AVAILABLE, DAYS
from .algorithms.course_planner import generate_schedule
from .algorithms.resolution import resolve_conflicts

# Version for future API compatibility
__version__ = "1.0.0"
