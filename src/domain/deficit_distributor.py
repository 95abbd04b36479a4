"""
Deficit Distributor Module

Spreads the hours still required this week evenly across the days that can
still change, under the punch-out cap.
"""

from dataclasses import replace
from typing import List, Optional

from .entities import DayRecord, DayStatus, LeaveType
from .time_codec import LAST_MINUTE, calculate_duration, minutes_to_time, time_to_minutes
from .week_accounting import calculate_week_stats
from config.config_manager import UserSettings, WorkPolicy


def is_locked(day: DayRecord) -> bool:
    """A locked day is settled or fully on leave and is never re-planned."""
    if day.leave_type == LeaveType.FULL:
        return True
    if day.status == DayStatus.PAST:
        return True
    if day.status == DayStatus.PRESENT and day.punch_out:
        return True
    return False


def effective_cap_minutes(settings: UserSettings) -> int:
    """Latest allowed punch-out in minutes: max_out_time when enabled, else 23:59."""
    if settings.enable_max_time:
        return time_to_minutes(settings.max_out_time)
    return LAST_MINUTE


def distribute_deficit(
    days: List[DayRecord],
    settings: UserSettings,
    policy: Optional[WorkPolicy] = None
) -> List[DayRecord]:
    """
    Plan punch-outs so the remaining requirement is split evenly over unlocked days.

    Single pass: when the cap cuts one day short, the shortfall is not moved
    onto the other days.

    Args:
        days: Day records of the week
        settings: Punch settings supplying the default start and the cap
        policy: Quota policy (defaults to WorkPolicy())

    Returns:
        New list of day records; locked days are returned as-is
    """
    new_days = list(days)
    adjustable = [i for i, day in enumerate(new_days) if not is_locked(day)]
    if not adjustable:
        return new_days

    stats = calculate_week_stats(new_days, policy)
    locked_hours = sum(day.gross_hours for day in new_days if is_locked(day))
    needed_total = max(0.0, stats.required_total - locked_hours)
    hours_per_day = needed_total / len(adjustable)

    cap_minutes = effective_cap_minutes(settings)

    for index in adjustable:
        day = new_days[index]
        start = day.punch_in or settings.standard_in_time
        end_minutes = time_to_minutes(start) + hours_per_day * 60
        end = minutes_to_time(min(end_minutes, cap_minutes))
        new_days[index] = replace(
            day,
            punch_in=start,
            punch_out=end,
            gross_hours=calculate_duration(start, end)
        )

    return new_days
