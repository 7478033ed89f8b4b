"""
Scheduler service that sequences the planners and the conflict resolver and
turns their notes into something a person can read.
"""

import logging
from typing import List, Optional

from ..schemas import ScheduleResponse
from ..scheduling.algorithms.course_planner import generate_schedule
from ..scheduling.algorithms.expansion import expand_calendar
from ..scheduling.algorithms.resolution import resolve_conflicts
from ..scheduling.constraints.time_constraints import normalize_event
from ..scheduling.core.models import (
    CalendarAction, CategoryBuckets, ConflictNote, ConflictStatus, Event, Resolution, ScheduleInput,
    StudyPlanItem, UnplacedStudy,
)
from ..scheduling.core.scheduler import plan_week

logger = logging.getLogger(__name__)


def build_assistant_message(notes: List[ConflictNote], base_message: str, unplaced: Optional[List[UnplacedStudy]] = None) -> str:
    """Summarize conflict notes (and dropped study time) for the user."""
    unresolved = [note for note in notes if note.status == ConflictStatus.UNRESOLVED]
    resolved = [note for note in notes if note.status == ConflictStatus.RESOLVED]

    if unresolved:
        first = unresolved[0]
        message = (
            f'"{first.title}" conflicts with "{first.conflicts_with}" on {first.date_label} '
            f"and could not be moved ({first.reason}). Would another day work better?"
        )
        if len(unresolved) > 1:
            message += f" {len(unresolved) - 1} more conflict(s) also need your attention."
    elif resolved:
        adjustments = ", ".join(f'"{note.title}" to {note.new_time}' for note in resolved)
        message = f"{base_message} I moved {adjustments} to avoid conflicts."
        if any(note.outside_preferred for note in resolved):
            message += " Some of these land outside their usual hours, so please confirm before I apply them."
    else:
        message = base_message

    if unplaced:
        missing_hours = sum(item.missing_minutes for item in unplaced) / 60
        message += f" {missing_hours:g}h of study time did not fit and was left off."

    return message


class SchedulerService:
    """Runs a planning pass, then conflict resolution, and applies the confirmation policy."""

    def normalize_events(self, events: List[Event]) -> List[Event]:
        """Clamp every window into the day. Raises InvalidEventError for broken input."""
        return [normalize_event(event) for event in events]

    def plan_and_resolve(self, buckets: CategoryBuckets, study_plan: List[StudyPlanItem]) -> ScheduleResponse:
        week = plan_week(buckets, study_plan)
        candidates = self.normalize_events(week.events)
        resolution = resolve_conflicts(candidates)
        return self._build_response(
            candidates, resolution,
            base_message="I've generated your schedule based on your requirements.",
            planner_notes=week.notes,
            unplaced=week.unplaced,
        )

    def generate_and_resolve(self, schedule_input: ScheduleInput) -> ScheduleResponse:
        plan = generate_schedule(schedule_input)
        candidates = self.normalize_events(plan.events)
        resolution = resolve_conflicts(candidates)
        return self._build_response(
            candidates, resolution,
            base_message="Here is a study plan for the week.",
            planner_notes=plan.notes,
        )

    def resolve(self, events: List[Event], day_start: str = None, day_end: str = None) -> ScheduleResponse:
        candidates = self.normalize_events(events)
        resolution = resolve_conflicts(candidates, day_start, day_end)
        return self._build_response(candidates, resolution, base_message="Your calendar is ready.")

    def apply_actions(self, calendar: List[Event], actions: List[CalendarAction]) -> ScheduleResponse:
        """Materialize calendar actions, then resolve whatever they collide with."""
        if not actions:
            return ScheduleResponse(events=calendar, assistant_message="Got it! Let me know if you need anything else.")

        expanded = expand_calendar(actions, calendar)
        candidates = self.normalize_events(expanded)
        resolution = resolve_conflicts(candidates)
        return self._build_response(candidates, resolution, base_message="Done, your calendar is updated.")

    def _build_response(self, candidates: List[Event], resolution: Resolution, base_message: str,
                        planner_notes: Optional[List[str]] = None,
                        unplaced: Optional[List[UnplacedStudy]] = None) -> ScheduleResponse:
        """
        Pick which calendar to hand back. Anything unresolved or moved outside
        its preferred window needs the user's approval, so the pre-resolution
        calendar is returned with the resolved one as a proposal.
        """
        message = build_assistant_message(resolution.notes, base_message, unplaced)

        if resolution.needs_confirmation:
            logger.info(f"⚠️ {len(resolution.notes)} adjustments need confirmation")
            return ScheduleResponse(
                events=candidates,
                proposed_events=resolution.events,
                conflict_notes=resolution.notes,
                planner_notes=planner_notes or [],
                unplaced=unplaced or [],
                requires_confirmation=True,
                assistant_message=message,
            )

        return ScheduleResponse(
            events=resolution.events,
            conflict_notes=resolution.notes,
            planner_notes=planner_notes or [],
            unplaced=unplaced or [],
            assistant_message=message,
        )


# Global scheduler service instance
scheduler_service = SchedulerService()
