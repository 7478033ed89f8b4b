"""
Wall-clock helpers. Times travel as "HH:MM" strings and are compared as
minutes since midnight.
"""


def to_minutes(time_str: str) -> int:
    """Parse "HH:MM" into minutes since midnight. A missing minute part counts as 0."""
    parts = time_str.split(":")
    hours = int(parts[0])
    minutes = int(parts[1]) if len(parts) > 1 and parts[1] else 0
    return hours * 60 + minutes


def to_time(minutes: int) -> str:
    """Format minutes since midnight as zero-padded "HH:MM". Callers clamp to the day."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_range(start: int, end: int) -> str:
    return f"{to_time(start)}-{to_time(end)}"
