"""
Data model for the scheduling engine.

Times are "HH:MM" wall-clock strings; every event is addressed either by a
weekday symbol (recurring) or by an ISO calendar date (one-off).
"""

import enum
import uuid
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, computed_field, model_validator

from ..utils.time_utils import to_minutes

TIME_PATTERN = r"^(([01]\d|2[0-3]):[0-5]\d|24:00)$"


class InvalidEventError(ValueError):
    """Raised when an event window cannot be normalized (end before start)."""


# Enums

class Day(str, enum.Enum):
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"

class Flexibility(str, enum.Enum):
    FIXED = "fixed"
    STRONG = "strong"
    MEDIUM = "medium"
    LOW = "low"

class EventCategory(str, enum.Enum):
    ROUTINE = "routine"
    COMMITMENT = "commitment"
    STUDY = "study"
    LOCK_IN = "lock-in"
    OTHER = "other"

class Chronotype(str, enum.Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"

class ConflictStatus(str, enum.Enum):
    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"

class ActionType(str, enum.Enum):
    ADD = "add"
    DELETE = "delete"
    MODIFY = "modify"
    EXCLUDE_DATE = "exclude_date"


# Least movable first
FLEXIBILITY_RANK = {
    Flexibility.FIXED: 0,
    Flexibility.STRONG: 1,
    Flexibility.MEDIUM: 2,
    Flexibility.LOW: 3,
}


# ----------------- Events ---------------------

class Event(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    start: str = Field(pattern=TIME_PATTERN)
    end: str = Field(pattern=TIME_PATTERN)
    day: Optional[Day] = None
    date: Optional[str] = None
    category: EventCategory = EventCategory.OTHER
    flexibility: Flexibility = Flexibility.MEDIUM
    course: Optional[str] = None
    source: Optional[str] = None
    excluded_dates: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_single_address(self):
        if self.day is not None and self.date is not None:
            raise ValueError("an event is addressed by a weekday or a date, not both")
        return self

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.end)

    @property
    def is_fixed(self) -> bool:
        return self.flexibility == Flexibility.FIXED


class ConflictNote(BaseModel):
    title: str
    date_label: str
    original_time: str
    new_time: Optional[str] = None
    status: ConflictStatus
    reason: str
    outside_preferred: bool = False
    conflicts_with: Optional[str] = None


class Resolution(BaseModel):
    """Output of one conflict resolution pass."""
    events: List[Event] = Field(default_factory=list)
    notes: List[ConflictNote] = Field(default_factory=list)

    @computed_field
    @property
    def has_unresolved(self) -> bool:
        return any(note.status == ConflictStatus.UNRESOLVED for note in self.notes)

    @computed_field
    @property
    def needs_confirmation(self) -> bool:
        return self.has_unresolved or any(note.outside_preferred for note in self.notes)


# ----------------- Weekly planner input ---------------------

class Preferences(BaseModel):
    wake: str = Field("08:00", pattern=TIME_PATTERN)
    sleep: str = Field("23:00", pattern=TIME_PATTERN)
    max_daily_study_hours: float = Field(8.0, ge=0)

    @model_validator(mode="after")
    def check_waking_window(self):
        if to_minutes(self.wake) >= to_minutes(self.sleep):
            raise ValueError("wake must be earlier than sleep")
        return self


class RoutineItem(BaseModel):
    title: str
    days: List[Day]
    start: str = Field(pattern=TIME_PATTERN)
    end: str = Field(pattern=TIME_PATTERN)
    flexibility: Flexibility = Flexibility.STRONG

class LockInItem(BaseModel):
    title: str
    day: Day
    start: str = Field(pattern=TIME_PATTERN)
    end: str = Field(pattern=TIME_PATTERN)
    flexibility: Flexibility = Flexibility.MEDIUM

class OtherEventItem(BaseModel):
    title: str
    date: str
    start: str = Field(pattern=TIME_PATTERN)
    end: str = Field(pattern=TIME_PATTERN)
    flexibility: Flexibility = Flexibility.MEDIUM

class DeadlineItem(BaseModel):
    title: str
    date: str
    course: Optional[str] = None
    importance: Optional[str] = None


class CategoryBuckets(BaseModel):
    routine_schedule: List[RoutineItem] = Field(default_factory=list)
    deadlines: List[DeadlineItem] = Field(default_factory=list)
    lock_in_sessions: List[LockInItem] = Field(default_factory=list)
    other_events: List[OtherEventItem] = Field(default_factory=list)
    preferences: Preferences = Field(default_factory=Preferences)


class StudyPlanItem(BaseModel):
    deadline_title: str
    hours_needed: float = Field(ge=0)
    daily_distribution: Dict[Day, float] = Field(default_factory=dict)


class UnplacedStudy(BaseModel):
    title: str
    day: Day
    requested_minutes: int
    placed_minutes: int = 0
    reason: str

    @property
    def missing_minutes(self) -> int:
        return self.requested_minutes - self.placed_minutes


class WeekPlan(BaseModel):
    events: List[Event] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)
    unplaced: List[UnplacedStudy] = Field(default_factory=list)

    @computed_field
    @property
    def unplaced_minutes(self) -> int:
        return sum(item.missing_minutes for item in self.unplaced)


# ----------------- Course-urgency planner input ---------------------

class Meeting(BaseModel):
    day: Day
    start: str = Field(pattern=TIME_PATTERN)
    end: str = Field(pattern=TIME_PATTERN)
    location: str = ""

class CourseInput(BaseModel):
    id: str
    name: str
    expected_weekly_hours: float = Field(ge=0)
    exam_date: str
    meetings: List[Meeting] = Field(default_factory=list)

class Commitment(BaseModel):
    id: str
    title: str
    day: Day
    start: str = Field(pattern=TIME_PATTERN)
    end: str = Field(pattern=TIME_PATTERN)
    type: Optional[str] = None
    locked: bool = False

class QuietHours(BaseModel):
    """Quiet hours begin at `start` in the evening and end at `end` in the morning."""
    start: str = Field("23:00", pattern=TIME_PATTERN)
    end: str = Field("07:00", pattern=TIME_PATTERN)

class SchedulePreferences(BaseModel):
    chrono: Optional[Chronotype] = None
    quiet_hours: QuietHours = Field(default_factory=QuietHours)
    max_daily_study_hours: float = Field(4.0, ge=0)
    mostly_free_day: Optional[Day] = None

class ScheduleInput(BaseModel):
    week_of: str
    school: Optional[str] = None
    term: Optional[str] = None
    preferences: SchedulePreferences = Field(default_factory=SchedulePreferences)
    courses: List[CourseInput] = Field(default_factory=list)
    commitments: List[Commitment] = Field(default_factory=list)

class StudyPlan(BaseModel):
    events: List[Event] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)


# ----------------- Calendar actions ---------------------

class CalendarAction(BaseModel):
    type: ActionType
    title: str
    day: Optional[Day] = None
    date: Optional[str] = None
    start: Optional[str] = Field(None, pattern=TIME_PATTERN)
    end: Optional[str] = Field(None, pattern=TIME_PATTERN)
    flexibility: Optional[Flexibility] = None

    @model_validator(mode="after")
    def check_address(self):
        if self.type != ActionType.DELETE and self.day is None and not self.date:
            raise ValueError(f"{self.type.value} requires either day or date")
        return self
