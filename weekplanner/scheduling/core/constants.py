"""
Shared constants for the scheduling engine.
"""

# Occupant marker for free time returned by the slot searches
AVAILABLE = "AVAILABLE"

# Weekday symbols, Monday first
DAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

# Bucket key for events carrying neither a date nor a weekday
UNSPECIFIED_DAY = "unspecified"

MINUTES_PER_DAY = 24 * 60
MIN_EVENT_MINUTES = 15

# Deadlines are materialized as full-day markers
DEADLINE_START = "00:00"
DEADLINE_END = "23:59"

# Keyword -> preferred window (minutes since midnight), checked in order
PREFERRED_WINDOWS = [
    (("breakfast",), 7 * 60, 10 * 60),
    (("lunch", "brunch"), 11 * 60, 15 * 60),
    (("dinner",), 17 * 60, 21 * 60),
    (("meeting", "call"), 8 * 60, 20 * 60),
]

# Course-urgency planner
CHRONO_SLOTS = {
    "morning": ["07:30", "09:00", "10:30", "12:00"],
    "afternoon": ["12:30", "14:00", "15:30", "17:15"],
    "night": ["16:30", "18:00", "19:45", "21:00"],
}
FALLBACK_SLOTS = ["08:00", "10:00", "12:00", "14:00", "16:00", "18:30"]
STUDY_BLOCK_MINUTES = 90
BUFFER_MINUTES = 15
MIN_TARGET_MINUTES = 180
MIN_BLOCKS_PER_COURSE = 2
EXAM_FOCUS_DAYS = 10

CLASS_DAY_BONUS = -60
FREE_DAY_PENALTY = 240
