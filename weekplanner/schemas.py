from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from .config import DAY_END, DAY_START
from .scheduling.core.models import (
    CalendarAction, CategoryBuckets, ConflictNote, Event, StudyPlanItem, UnplacedStudy, TIME_PATTERN,
)
from .scheduling.utils.time_utils import to_minutes

# ----------------- Request Schemas ---------------------

class PlanWeekRequest(BaseModel):
    buckets: CategoryBuckets = Field(default_factory=CategoryBuckets)
    study_plan: List[StudyPlanItem] = Field(default_factory=list)

class ResolveRequest(BaseModel):
    events: List[Event]
    day_start: Optional[str] = Field(None, pattern=TIME_PATTERN)
    day_end: Optional[str] = Field(None, pattern=TIME_PATTERN)

    @model_validator(mode="after")
    def check_day_bounds(self):
        # Unset bounds fall back to the configured defaults
        if to_minutes(self.day_start or DAY_START) >= to_minutes(self.day_end or DAY_END):
            raise ValueError("day_start must be earlier than day_end")
        return self

class ActionsRequest(BaseModel):
    calendar: List[Event] = Field(default_factory=list)
    actions: List[CalendarAction]

# ----------------- Response Schemas ---------------------

class ScheduleResponse(BaseModel):
    """
    Calendar handed back to the caller. When requires_confirmation is set,
    `events` is the calendar before any moves and `proposed_events` holds the
    resolved version awaiting the user's approval.
    """
    events: List[Event]
    proposed_events: Optional[List[Event]] = None
    conflict_notes: List[ConflictNote] = Field(default_factory=list)
    planner_notes: List[str] = Field(default_factory=list)
    unplaced: List[UnplacedStudy] = Field(default_factory=list)
    requires_confirmation: bool = False
    assistant_message: str

class HealthResponse(BaseModel):
    status: str
    message: str
