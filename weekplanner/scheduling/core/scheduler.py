"""
Weekly planner that materializes fixed items and allocates study hours.
"""

import logging
from typing import Dict, List, Optional

from .constants import DAYS, DEADLINE_END, DEADLINE_START, MINUTES_PER_DAY
from .models import (
    CategoryBuckets, Day, DeadlineItem, Event, EventCategory, Flexibility, LockInItem,
    OtherEventItem, Preferences, RoutineItem, StudyPlanItem, UnplacedStudy, WeekPlan,
)
from ..utils.day_utils import events_on_weekday
from ..utils.slot_utils import find_first_gap, slots_for_events
from ..utils.time_utils import to_minutes, to_time

logger = logging.getLogger(__name__)

CAP_REACHED = "daily study cap reached"
NO_GAP = "no free gap between wake and sleep"

# ================================
# INITIALIZATION & SETUP
# ================================

class WeeklyPlanner:
    """
    Builds one week's candidate calendar. Fixed and recurring items go in first,
    then study hours are dropped into the first gap that fits each day.
    Later steps read earlier placements, so the order of plan() matters.
    """
    def __init__(self, preferences: Preferences):
        self.preferences = preferences
        self.wake = to_minutes(preferences.wake)
        self.sleep = min(to_minutes(preferences.sleep), MINUTES_PER_DAY)
        self.daily_cap_minutes = int(preferences.max_daily_study_hours * 60)
        self._reset()

    def _reset(self):
        self.events: List[Event] = []
        self.notes: List[str] = []
        self.unplaced: List[UnplacedStudy] = []
        self.study_minutes: Dict[str, int] = {day: 0 for day in DAYS}

    def plan(self, buckets: CategoryBuckets, study_plan: Optional[List[StudyPlanItem]] = None) -> WeekPlan:
        """Run one planning pass and return the candidate events."""
        self._reset()

        self.place_routines(buckets.routine_schedule)
        self.place_lock_ins(buckets.lock_in_sessions)
        self.place_other_events(buckets.other_events)
        self.place_deadlines(buckets.deadlines)

        for item in study_plan or []:
            self.allocate_study_hours(item)

        logger.info(
            f"Planned {len(self.events)} events, "
            f"{sum(self.study_minutes.values())} study minutes, "
            f"{len(self.unplaced)} unplaced allocations"
        )
        return WeekPlan(events=list(self.events), notes=list(self.notes), unplaced=list(self.unplaced))

# ================================
# FIXED & RECURRING ITEMS
# ================================

    def place_routines(self, routines: List[RoutineItem]):
        for item in routines:
            for day in item.days:
                self.events.append(Event(
                    title=item.title,
                    day=day,
                    start=item.start,
                    end=item.end,
                    category=EventCategory.ROUTINE,
                    flexibility=item.flexibility,
                    source="custom",
                ))

    def place_lock_ins(self, sessions: List[LockInItem]):
        for item in sessions:
            self.events.append(Event(
                title=item.title,
                day=item.day,
                start=item.start,
                end=item.end,
                category=EventCategory.LOCK_IN,
                flexibility=item.flexibility,
                source="study",
            ))

    def place_other_events(self, others: List[OtherEventItem]):
        for item in others:
            self.events.append(Event(
                title=item.title,
                date=item.date,
                start=item.start,
                end=item.end,
                category=EventCategory.OTHER,
                flexibility=item.flexibility,
                source="custom",
            ))

    def place_deadlines(self, deadlines: List[DeadlineItem]):
        """Deadlines become full-day fixed markers on their date."""
        for item in deadlines:
            self.events.append(Event(
                title=f"DEADLINE: {item.title}",
                date=item.date,
                start=DEADLINE_START,
                end=DEADLINE_END,
                category=EventCategory.COMMITMENT,
                flexibility=Flexibility.FIXED,
                course=item.course,
                source="commitment",
            ))

# ================================
# STUDY HOUR ALLOCATION
# ================================

    def allocate_study_hours(self, item: StudyPlanItem):
        """
        Place each day's share of a study plan item as one block, capped by the
        remaining daily allowance. Whatever cannot be placed is recorded, not raised.
        """
        title = f"Study: {item.deadline_title}"

        for day in Day:
            hours = item.daily_distribution.get(day, 0)
            if not hours or hours <= 0:
                continue

            requested = round(hours * 60)
            allowance = max(0, self.daily_cap_minutes - self.study_minutes[day.value])
            to_place = min(requested, allowance)
            placed = 0
            reason = CAP_REACHED

            if to_place > 0:
                day_slots = slots_for_events(events_on_weekday(self.events, day.value))
                slot = find_first_gap(day_slots, self.wake, self.sleep, to_place)
                if slot:
                    self.events.append(Event(
                        title=title,
                        day=day,
                        start=to_time(slot.start),
                        end=to_time(slot.end),
                        category=EventCategory.STUDY,
                        flexibility=Flexibility.MEDIUM,
                        course=item.deadline_title,
                        source="study",
                    ))
                    self.study_minutes[day.value] += to_place
                    placed = to_place
                    logger.debug(f"Placed {to_place} min of '{title}' on {day.value} at {to_time(slot.start)}")
                else:
                    reason = NO_GAP

            if placed < requested:
                self._record_unplaced(title, day, requested, placed, reason)

    def _record_unplaced(self, title: str, day: Day, requested: int, placed: int, reason: str):
        missing = requested - placed
        self.unplaced.append(UnplacedStudy(
            title=title,
            day=day,
            requested_minutes=requested,
            placed_minutes=placed,
            reason=reason,
        ))
        self.notes.append(f"Could not place {missing / 60:g}h of {title} on {day.value}: {reason}.")
        logger.warning(f"Dropped {missing} min of '{title}' on {day.value} ({reason})")

    def __repr__(self):
        return f"WeeklyPlanner(wake={self.preferences.wake}, sleep={self.preferences.sleep}, cap={self.daily_cap_minutes}min)"


def plan_week(buckets: CategoryBuckets, study_plan: Optional[List[StudyPlanItem]] = None) -> WeekPlan:
    """Plan a week from category buckets and per-day study directives."""
    return WeeklyPlanner(buckets.preferences).plan(buckets, study_plan)
