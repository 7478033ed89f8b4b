"""Tests for the per-day conflict resolver."""
import itertools

from conftest import make_event

from weekplanner.scheduling.algorithms.resolution import (
    FIXED_REASON, MOVED_AROUND_FIXED, MOVED_TO_NEXT_SLOT, NO_SLOT_REASON, overlaps, resolve_conflicts,
)
from weekplanner.scheduling.core.models import ConflictStatus


def by_title(resolution, title: str):
    return next(event for event in resolution.events if event.title == title)


def test_movable_event_moves_after_fixed_one() -> None:
    events = [make_event("Exam", "09:00", "10:00", "fixed"), make_event("Study", "09:30", "10:30")]

    resolution = resolve_conflicts(events)
    moved = by_title(resolution, "Study")

    assert (moved.start, moved.end) == ("10:00", "11:00")
    assert moved.id == events[1].id
    assert len(resolution.notes) == 1
    note = resolution.notes[0]
    assert note.status == ConflictStatus.RESOLVED
    assert note.original_time == "09:30-10:30"
    assert note.new_time == "10:00-11:00"
    assert note.reason == MOVED_AROUND_FIXED
    assert note.conflicts_with == "Exam"
    assert not note.outside_preferred
    assert not resolution.needs_confirmation


def test_breakfast_stays_in_preferred_window() -> None:
    events = [make_event("Meeting", "07:30", "08:30", "fixed"), make_event("Breakfast", "07:00", "08:00")]

    resolution = resolve_conflicts(events)
    breakfast = by_title(resolution, "Breakfast")

    assert (breakfast.start, breakfast.end) == ("08:30", "09:30")
    assert resolution.notes[0].status == ConflictStatus.RESOLVED
    assert resolution.notes[0].outside_preferred is False


def test_fixed_clash_is_reported_not_moved() -> None:
    events = [make_event("Lab A", "10:00", "11:00", "fixed"), make_event("Lab B", "10:00", "11:00", "fixed")]

    resolution = resolve_conflicts(events)

    assert [(e.title, e.start, e.end) for e in resolution.events] == [
        ("Lab A", "10:00", "11:00"), ("Lab B", "10:00", "11:00"),
    ]
    assert len(resolution.notes) == 1
    note = resolution.notes[0]
    assert note.title == "Lab B"
    assert note.status == ConflictStatus.UNRESOLVED
    assert note.reason == FIXED_REASON
    assert note.new_time is None
    assert resolution.has_unresolved
    assert resolution.needs_confirmation


def test_lunch_pushed_past_its_window_needs_confirmation() -> None:
    events = [make_event("Seminar", "14:00", "15:00", "fixed"), make_event("Lunch", "14:00", "15:00")]

    resolution = resolve_conflicts(events)
    lunch = by_title(resolution, "Lunch")

    assert (lunch.start, lunch.end) == ("15:00", "16:00")
    assert resolution.notes[0].outside_preferred is True
    assert not resolution.has_unresolved
    assert resolution.needs_confirmation


def test_late_event_wraps_to_start_of_day() -> None:
    events = [make_event("Shift", "20:00", "22:00", "fixed"), make_event("Dinner", "20:30", "21:30")]

    resolution = resolve_conflicts(events)
    dinner = by_title(resolution, "Dinner")

    assert (dinner.start, dinner.end) == ("06:00", "07:00")
    assert resolution.notes[0].outside_preferred is True


def test_full_day_leaves_event_unresolved() -> None:
    events = [make_event("Work", "06:00", "22:00", "fixed"), make_event("Gym", "09:00", "10:00")]

    resolution = resolve_conflicts(events)
    gym = by_title(resolution, "Gym")

    assert (gym.start, gym.end) == ("09:00", "10:00")
    assert resolution.notes[0].status == ConflictStatus.UNRESOLVED
    assert resolution.notes[0].reason == NO_SLOT_REASON
    assert resolution.notes[0].conflicts_with == "Work"


def test_more_movable_event_gives_way() -> None:
    events = [make_event("Reading", "09:00", "10:00", "low"), make_event("Run", "09:30", "10:30", "strong")]

    resolution = resolve_conflicts(events)

    assert (by_title(resolution, "Run").start, by_title(resolution, "Run").end) == ("09:30", "10:30")
    assert (by_title(resolution, "Reading").start, by_title(resolution, "Reading").end) == ("10:30", "11:30")
    assert resolution.notes[0].title == "Reading"
    assert resolution.notes[0].reason == MOVED_TO_NEXT_SLOT


def test_short_event_gets_minimum_duration_when_moved() -> None:
    events = [make_event("Standup", "09:00", "10:00", "fixed"), make_event("Quick call", "09:00", "09:05")]

    resolution = resolve_conflicts(events)
    call = by_title(resolution, "Quick call")

    assert (call.start, call.end) == ("10:00", "10:15")


def test_buckets_are_resolved_independently() -> None:
    events = [
        make_event("Exam", "09:00", "10:00", "fixed", day="Mon"),
        make_event("Study", "09:00", "10:00", day="Tue"),
        make_event("Trip", "09:00", "10:00", date="2024-12-23"),
        make_event("Errand", "09:00", "10:00", day=None),
    ]

    resolution = resolve_conflicts(events)

    assert resolution.notes == []
    assert [event.title for event in resolution.events] == ["Exam", "Study", "Trip", "Errand"]


def test_unspecified_bucket_label() -> None:
    events = [make_event("A", "09:00", "10:00", "fixed", day=None), make_event("B", "09:00", "10:00", day=None)]

    resolution = resolve_conflicts(events)

    assert resolution.notes[0].date_label == "unspecified"


def test_resolving_twice_changes_nothing() -> None:
    events = [
        make_event("Exam", "09:00", "10:00", "fixed"),
        make_event("Study", "09:30", "10:30"),
        make_event("Lunch", "12:00", "13:00"),
        make_event("Call", "12:30", "13:00", "low"),
    ]

    first = resolve_conflicts(events)
    second = resolve_conflicts(first.events)

    assert second.notes == []
    assert [(e.id, e.start, e.end) for e in second.events] == [(e.id, e.start, e.end) for e in first.events]


def test_identical_movable_events_end_up_disjoint() -> None:
    events = [make_event("Task", "09:00", "10:00") for _ in range(5)]

    resolution = resolve_conflicts(events)

    assert len(resolution.events) == 5
    for first, second in itertools.combinations(resolution.events, 2):
        assert not overlaps(first, second)
    assert sorted(event.start for event in resolution.events) == ["09:00", "10:00", "11:00", "12:00", "13:00"]


def test_custom_day_bounds() -> None:
    events = [
        make_event("Class", "08:00", "11:00", "fixed"),
        make_event("Task", "10:00", "11:00"),
        make_event("Essay", "10:00", "11:00"),
    ]

    resolution = resolve_conflicts(events, day_start="08:00", day_end="12:00")

    assert (by_title(resolution, "Task").start, by_title(resolution, "Task").end) == ("11:00", "12:00")
    assert resolution.notes[1].title == "Essay"
    assert resolution.notes[1].reason == NO_SLOT_REASON


def test_fixed_events_are_never_moved() -> None:
    events = [make_event("Lecture", "09:00", "10:00", "fixed"), make_event("Lab", "09:30", "10:30", "fixed")]

    resolution = resolve_conflicts(events)

    assert {(e.title, e.start, e.end) for e in resolution.events} == {
        ("Lecture", "09:00", "10:00"), ("Lab", "09:30", "10:30"),
    }


def test_relocated_events_end_by_midnight() -> None:
    events = [
        make_event("Late shift", "22:00", "23:00", "fixed"),
        make_event("Task", "22:30", "23:30"),
        make_event("Essay", "22:30", "23:30"),
    ]

    resolution = resolve_conflicts(events, day_start="22:00", day_end="24:00")

    assert (by_title(resolution, "Task").start, by_title(resolution, "Task").end) == ("23:00", "24:00")
    assert resolution.notes[1].reason == NO_SLOT_REASON
    assert all(event.end_minutes <= 24 * 60 for event in resolution.events)


def test_day_end_past_midnight_is_clamped() -> None:
    events = [make_event("Shift", "00:00", "24:00", "fixed"), make_event("Task", "23:00", "24:00")]

    resolution = resolve_conflicts(events, day_end="26:00")

    assert (by_title(resolution, "Task").start, by_title(resolution, "Task").end) == ("23:00", "24:00")
    assert resolution.notes[0].status == ConflictStatus.UNRESOLVED
