"""Tests for the orchestration service: ordering, confirmation policy and messages."""
import pytest

from conftest import make_event

from weekplanner.scheduling.constraints.time_constraints import normalize_event
from weekplanner.scheduling.core.models import (
    CalendarAction, CategoryBuckets, ConflictNote, ConflictStatus, InvalidEventError, Preferences, RoutineItem,
    StudyPlanItem,
)
from weekplanner.services.scheduler_service import SchedulerService, build_assistant_message


@pytest.fixture
def service() -> SchedulerService:
    return SchedulerService()


def test_normalize_extends_short_events() -> None:
    event = normalize_event(make_event("Ping", "09:00", "09:00"))
    assert (event.start, event.end) == ("09:00", "09:15")


def test_normalize_pads_and_clamps_to_end_of_day() -> None:
    event = normalize_event(make_event("Late", "23:55", "23:59"))
    assert (event.start, event.end) == ("23:55", "24:00")


def test_normalize_rejects_backwards_window() -> None:
    with pytest.raises(InvalidEventError):
        normalize_event(make_event("Broken", "10:00", "09:00"))


def test_normalize_rejects_start_at_end_of_day() -> None:
    with pytest.raises(InvalidEventError):
        normalize_event(make_event("Broken", "24:00", "24:00"))


def test_message_for_unresolved_conflict() -> None:
    notes = [
        ConflictNote(title="Lab B", date_label="Mon", original_time="10:00-11:00",
                     status=ConflictStatus.UNRESOLVED, reason="fixed time could not be moved",
                     conflicts_with="Lab A"),
    ]

    message = build_assistant_message(notes, "Done.")

    assert message == ('"Lab B" conflicts with "Lab A" on Mon and could not be moved '
                       "(fixed time could not be moved). Would another day work better?")


def test_message_without_notes_is_base_message() -> None:
    assert build_assistant_message([], "Done.") == "Done."


def test_resolve_returns_moved_calendar(service: SchedulerService) -> None:
    events = [make_event("Exam", "09:00", "10:00", "fixed"), make_event("Study", "09:30", "10:30")]

    response = service.resolve(events)

    assert response.requires_confirmation is False
    assert response.proposed_events is None
    assert [(e.title, e.start) for e in response.events] == [("Exam", "09:00"), ("Study", "10:00")]
    assert response.assistant_message == 'Your calendar is ready. I moved "Study" to 10:00-11:00 to avoid conflicts.'


def test_resolve_asks_before_leaving_preferred_window(service: SchedulerService) -> None:
    events = [make_event("Seminar", "14:00", "15:00", "fixed"), make_event("Lunch", "14:00", "15:00")]

    response = service.resolve(events)

    assert response.requires_confirmation is True
    assert [(e.title, e.start) for e in response.events] == [("Seminar", "14:00"), ("Lunch", "14:00")]
    assert [(e.title, e.start) for e in response.proposed_events] == [("Seminar", "14:00"), ("Lunch", "15:00")]
    assert "please confirm" in response.assistant_message


def test_resolve_rejects_invalid_events(service: SchedulerService) -> None:
    with pytest.raises(InvalidEventError):
        service.resolve([make_event("Broken", "10:00", "09:00")])


def test_plan_reports_unplaced_study(service: SchedulerService) -> None:
    buckets = CategoryBuckets(preferences=Preferences(max_daily_study_hours=2))
    study_plan = [StudyPlanItem(deadline_title="Exam", hours_needed=3, daily_distribution={"Mon": 3})]

    response = service.plan_and_resolve(buckets, study_plan)

    assert response.requires_confirmation is False
    assert len(response.events) == 1
    assert response.unplaced[0].missing_minutes == 60
    assert len(response.planner_notes) == 1
    assert response.assistant_message.endswith("1h of study time did not fit and was left off.")


def test_plan_resolves_routine_clashes(service: SchedulerService) -> None:
    buckets = CategoryBuckets(
        routine_schedule=[
            RoutineItem(title="Lecture", days=["Tue"], start="10:00", end="12:00", flexibility="fixed"),
            RoutineItem(title="Gym", days=["Tue"], start="11:00", end="12:00"),
        ],
    )

    response = service.plan_and_resolve(buckets, [])

    gym = next(event for event in response.events if event.title == "Gym")
    assert (gym.start, gym.end) == ("12:00", "13:00")
    assert response.conflict_notes[0].status == ConflictStatus.RESOLVED


def test_no_actions_returns_calendar_unchanged(service: SchedulerService) -> None:
    calendar = [make_event("Gym", "07:00", "08:00")]

    response = service.apply_actions(calendar, [])

    assert response.events == calendar
    assert response.assistant_message.startswith("Got it!")


def test_added_event_is_moved_out_of_fixed_time(service: SchedulerService) -> None:
    calendar = [make_event("Work", "09:00", "17:00", "fixed")]
    actions = [CalendarAction(type="add", title="Coffee", day="Mon", start="09:00", end="10:00")]

    response = service.apply_actions(calendar, actions)

    coffee = next(event for event in response.events if event.title == "Coffee")
    assert (coffee.start, coffee.end) == ("17:00", "18:00")
    assert response.requires_confirmation is False
