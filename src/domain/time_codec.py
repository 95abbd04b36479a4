"""
Time Codec Module

Conversions between "HH:MM" clock strings, minute offsets and decimal hours.
"""

import math

MINUTES_PER_DAY = 24 * 60
LAST_MINUTE = MINUTES_PER_DAY - 1  # 23:59


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def time_to_minutes(time_str: str) -> int:
    """Parse "HH:MM" to minutes since midnight. Empty or malformed input gives 0."""
    if not time_str:
        return 0
    try:
        parts = time_str.split(':')
        return int(parts[0]) * 60 + int(parts[1])
    except (ValueError, IndexError):
        return 0


def minutes_to_time(total_minutes: float) -> str:
    """
    Format minutes since midnight as "HH:MM".

    Negative or non-finite input clamps to 00:00, anything past the end of the
    day clamps to 23:59. Fractions are rounded to the nearest whole minute.
    """
    if total_minutes is None or not math.isfinite(total_minutes):
        mins = 0
    else:
        mins = max(0, _round_half_up(total_minutes))
    if mins >= MINUTES_PER_DAY:
        mins = LAST_MINUTE
    hours, minutes = divmod(mins, 60)
    return f"{hours:02d}:{minutes:02d}"


def add_minutes_to_time(time_str: str, minutes_to_add: float) -> str:
    """Shift a clock string by a number of minutes."""
    if not time_str:
        return "00:00"
    return minutes_to_time(time_to_minutes(time_str) + minutes_to_add)


def calculate_duration(start: str, end: str) -> float:
    """
    Hours between two clock strings, rounded to 4 decimals.

    Returns 0 when either side is empty or end is not after start; overnight
    spans are not supported.
    """
    if not start or not end:
        return 0.0
    diff = time_to_minutes(end) - time_to_minutes(start)
    return round(diff / 60, 4) if diff > 0 else 0.0


def _format_duration(is_negative: bool, hours: int, minutes: int) -> str:
    if minutes >= 60:
        hours += minutes // 60
        minutes %= 60
    return f"{'-' if is_negative else ''}{hours}h {minutes}m"


def decimal_to_duration(decimal_hours: float) -> str:
    """Format decimal hours as "9h 30m", keeping the sign."""
    abs_hours = abs(decimal_hours)
    hours = int(math.floor(abs_hours))
    minutes = _round_half_up((abs_hours - hours) * 60)
    return _format_duration(decimal_hours < 0, hours, minutes)


def minutes_to_duration(total_minutes: float) -> str:
    """Format minutes as "9h 30m", keeping the sign."""
    abs_minutes = abs(total_minutes)
    hours = int(abs_minutes // 60)
    minutes = _round_half_up(abs_minutes % 60)
    return _format_duration(total_minutes < 0, hours, minutes)
