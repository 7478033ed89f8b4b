"""
Workload-based day ordering for study placement.
"""

from typing import Dict, List, Optional, Set

from ..core.constants import CLASS_DAY_BONUS, DAYS, FREE_DAY_PENALTY


def calculate_day_load_score(day: str, study_minutes: int, class_days: Set[str],
                             mostly_free_day: Optional[str] = None) -> int:
    """
    Lower is better: current study load, pulled down on days the course meets
    and pushed up on the day the user wants to keep light.
    """
    score = study_minutes
    if day in class_days:
        score += CLASS_DAY_BONUS
    if day == mostly_free_day:
        score += FREE_DAY_PENALTY
    return score


def order_days_for_course(study_minutes_by_day: Dict[str, int], class_days: Set[str],
                          mostly_free_day: Optional[str] = None) -> List[str]:
    """Weekdays ordered by load score; ties keep Monday-first order."""
    return sorted(
        DAYS,
        key=lambda day: calculate_day_load_score(day, study_minutes_by_day.get(day, 0), class_days, mostly_free_day),
    )
