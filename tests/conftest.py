"""Shared fixtures and builders for the scheduling tests."""
import typing as t

import pytest

from weekplanner.scheduling.core.models import Event, Preferences


def make_event(title: str, start: str, end: str, flexibility: str = "medium",
               day: t.Optional[str] = "Mon", **kwargs: t.Any) -> Event:
    """Build an event addressed by weekday unless a date is given."""
    if "date" in kwargs:
        day = None
    return Event(title=title, start=start, end=end, flexibility=flexibility, day=day, **kwargs)


@pytest.fixture
def preferences() -> Preferences:
    return Preferences(wake="08:00", sleep="23:00", max_daily_study_hours=4)
