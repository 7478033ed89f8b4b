"""
Course urgency scoring used to order placement attempts.
"""

import math
from typing import List, Tuple

from dateutil import parser as date_parser

from ..core.models import CourseInput

SECONDS_PER_DAY = 24 * 60 * 60


def days_between(start: str, end: str) -> int:
    """Whole days from start to end (rounded, never negative)."""
    # Compare wall-clock values; mixing aware and naive stamps would raise
    start_dt = date_parser.isoparse(start).replace(tzinfo=None)
    end_dt = date_parser.isoparse(end).replace(tzinfo=None)
    delta = end_dt - start_dt
    # Halves round up
    return max(0, math.floor(delta.total_seconds() / SECONDS_PER_DAY + 0.5))


def calculate_course_urgency(days_until_exam: int) -> float:
    """
    Map days-until-exam to an urgency score.
    Exams a week or less away score 3.0; the score decays with distance but never drops below 0.6.
    """
    return max(0.6, 21 / max(7, days_until_exam))


def rank_courses_by_urgency(courses: List[CourseInput], week_of: str) -> List[Tuple[CourseInput, int, float]]:
    """
    (course, days_until_exam, urgency) triples, most urgent first.
    Equal urgencies keep input order.
    """
    ranked = []
    for course in courses:
        days_until_exam = days_between(week_of, course.exam_date)
        ranked.append((course, days_until_exam, calculate_course_urgency(days_until_exam)))

    ranked.sort(key=lambda entry: entry[2], reverse=True)
    return ranked
