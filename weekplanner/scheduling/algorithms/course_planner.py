"""
Course-urgency planner: builds study blocks from raw course metadata when no
per-day hour distribution is given.
"""

import logging
import math
from typing import Dict, List

from ..constraints.time_constraints import fits_daily_cap, is_study_slot_allowed
from ..core.constants import (
    BUFFER_MINUTES, DAYS, EXAM_FOCUS_DAYS, MIN_BLOCKS_PER_COURSE, MIN_TARGET_MINUTES, STUDY_BLOCK_MINUTES,
)
from ..core.models import (
    Commitment, CourseInput, Day, Event, EventCategory, Flexibility, ScheduleInput, SchedulePreferences, StudyPlan,
)
from ..core.time_slot import TimeSlot
from ..scoring.priority_scoring import rank_courses_by_urgency
from ..scoring.time_scoring import candidate_start_times
from ..scoring.workload_scoring import order_days_for_course
from ..utils.time_utils import to_minutes, to_time

logger = logging.getLogger(__name__)


class DayLedger:
    """Occupied slots and accumulated study minutes per weekday."""
    def __init__(self):
        self.slots: Dict[str, List[TimeSlot]] = {day: [] for day in DAYS}
        self.study_minutes: Dict[str, int] = {day: 0 for day in DAYS}

    def add(self, day: str, start: int, end: int, event: Event):
        self.slots[day].append(TimeSlot(start, end, event))
        if event.category == EventCategory.STUDY:
            self.study_minutes[day] += end - start


def build_fixed_events(courses: List[CourseInput], commitments: List[Commitment]) -> List[Event]:
    """Class meetings are always fixed; commitments are fixed only when locked."""
    events = []
    for course in courses:
        for index, meeting in enumerate(course.meetings):
            events.append(Event(
                id=f"{course.id}-class-{index}",
                title=f"{course.name} - class",
                day=meeting.day,
                start=meeting.start,
                end=meeting.end,
                category=EventCategory.ROUTINE,
                flexibility=Flexibility.FIXED,
                course=course.id,
                source="class",
            ))

    for commitment in commitments:
        events.append(Event(
            id=commitment.id,
            title=commitment.title,
            day=commitment.day,
            start=commitment.start,
            end=commitment.end,
            category=EventCategory.COMMITMENT,
            flexibility=Flexibility.FIXED if commitment.locked else Flexibility.MEDIUM,
            source="commitment",
        ))
    return events


def place_study_block(course: CourseInput, ledger: DayLedger, preferences: SchedulePreferences,
                      events: List[Event], block_minutes: int = STUDY_BLOCK_MINUTES) -> bool:
    """
    Try candidate days (lightest first) and candidate start times (chronotype
    first) until one block fits. Returns False when nothing fits this week.
    """
    quiet_start = to_minutes(preferences.quiet_hours.start)
    quiet_end = to_minutes(preferences.quiet_hours.end)
    cap_minutes = preferences.max_daily_study_hours * 60
    class_days = {meeting.day.value for meeting in course.meetings}
    free_day = preferences.mostly_free_day.value if preferences.mostly_free_day else None
    start_times = candidate_start_times(preferences.chrono)

    for day in order_days_for_course(ledger.study_minutes, class_days, free_day):
        if not fits_daily_cap(ledger.study_minutes[day], block_minutes, cap_minutes):
            continue

        for start in start_times:
            end = start + block_minutes
            if not is_study_slot_allowed(start, end, ledger.slots[day], quiet_start, quiet_end, BUFFER_MINUTES):
                continue

            event = Event(
                id=f"{course.id}-study-{len(events)}",
                title=f"{course.name} study",
                day=Day(day),
                start=to_time(start),
                end=to_time(end),
                category=EventCategory.STUDY,
                flexibility=Flexibility.MEDIUM,
                course=course.id,
                source="study",
            )
            events.append(event)
            ledger.add(day, start, end, event)
            logger.debug(f"Placed '{event.title}' on {day} {event.start}-{event.end}")
            return True

    return False


def generate_schedule(schedule_input: ScheduleInput) -> StudyPlan:
    """
    Rank courses by exam urgency and give each its study blocks in turn.
    A course that cannot reach its target is reported in the notes.
    """
    preferences = schedule_input.preferences
    events = build_fixed_events(schedule_input.courses, schedule_input.commitments)
    ledger = DayLedger()
    for event in events:
        ledger.add(event.day.value, event.start_minutes, event.end_minutes, event)

    notes: List[str] = []

    for course, days_until_exam, urgency in rank_courses_by_urgency(schedule_input.courses, schedule_input.week_of):
        target_minutes = max(MIN_TARGET_MINUTES, course.expected_weekly_hours * 60)
        blocks_needed = max(MIN_BLOCKS_PER_COURSE, math.ceil(target_minutes / STUDY_BLOCK_MINUTES))
        placed = 0

        while placed < blocks_needed:
            if not place_study_block(course, ledger, preferences, events):
                break
            placed += 1

        logger.info(f"{course.name}: urgency {urgency:.2f}, placed {placed}/{blocks_needed} blocks")

        if days_until_exam <= EXAM_FOCUS_DAYS:
            notes.append(f"{course.name}: pulled extra focus because the exam is in {days_until_exam} days.")
        if placed < blocks_needed:
            notes.append(f"{course.name}: only {placed} of {blocks_needed} study blocks fit this week.")
            logger.warning(f"{course.name} short of its study target ({placed}/{blocks_needed})")

    notes.append(
        f"Capped study to {preferences.max_daily_study_hours:g}h/day and respected quiet hours "
        f"({preferences.quiet_hours.end}-{preferences.quiet_hours.start})."
    )
    if preferences.mostly_free_day:
        notes.append(f"Kept {preferences.mostly_free_day.value} lighter per your request.")

    return StudyPlan(events=events, notes=notes)
