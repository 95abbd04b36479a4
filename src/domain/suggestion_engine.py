"""
Suggestion Engine Module

Computes punch-out suggestions for an open day: a "standard" one from the
day's own target and an "adjusted" one that spreads the week's remaining
requirement over the days still open.
"""

import math
from typing import List, Optional

from .entities import (
    DayRecord, DayStatus, DaySuggestions, LeaveType,
    SuggestionResult, SuggestionStatus
)
from .deficit_distributor import effective_cap_minutes
from .time_codec import minutes_to_duration, minutes_to_time, time_to_minutes
from .week_accounting import calculate_week_stats, get_daily_expectation
from config.config_manager import UserSettings, WorkPolicy


def calculate_out_time_from_minutes(
    punch_in: str,
    target_minutes: float,
    settings: UserSettings,
    policy: Optional[WorkPolicy] = None
) -> SuggestionResult:
    """
    Suggest a punch-out for working target_minutes after punch_in.

    A safety buffer is added to any positive target to absorb the seconds
    hidden by minute-level punch times. When the cap is in the way, the
    deficit is expressed as whole half-day leave credits.

    Args:
        punch_in: Punch-in time "HH:MM"
        target_minutes: Minutes to work
        settings: Punch settings supplying the cap
        policy: Quota policy (defaults to WorkPolicy())

    Returns:
        SuggestionResult with status OK, SUGGESTION or IMPOSSIBLE
    """
    policy = policy or WorkPolicy()
    start_minutes = time_to_minutes(punch_in)

    buffered_target = math.ceil(target_minutes)
    if target_minutes > 0:
        buffered_target += policy.safety_buffer_minutes

    suggested_out = start_minutes + buffered_target
    cap_minutes = effective_cap_minutes(settings)

    if suggested_out <= cap_minutes:
        return SuggestionResult(
            time=minutes_to_time(suggested_out),
            status=SuggestionStatus.OK,
            msg="Target Met"
        )

    max_possible = max(0, cap_minutes - start_minutes)
    deficit_minutes = buffered_target - max_possible

    half_day_minutes = policy.half_day_credit_minutes
    half_days_needed = math.ceil(deficit_minutes / half_day_minutes)

    if half_days_needed > 0:
        credit_minutes = half_days_needed * half_day_minutes
        new_target = max(0, buffered_target - credit_minutes)
        plural = "s" if half_days_needed > 1 else ""
        return SuggestionResult(
            time=minutes_to_time(start_minutes + new_target),
            status=SuggestionStatus.SUGGESTION,
            msg=f"Add {half_days_needed} Half-Day{plural}"
        )

    # Only reachable with a zero target and a punch-in past the cap
    return SuggestionResult(
        time=minutes_to_time(cap_minutes),
        status=SuggestionStatus.IMPOSSIBLE,
        msg=f"Cap reached. Deficit: {minutes_to_duration(deficit_minutes)}"
    )


def calculate_out_time(
    punch_in: str,
    target_hours: float,
    settings: UserSettings,
    policy: Optional[WorkPolicy] = None
) -> SuggestionResult:
    """Hour-based wrapper around calculate_out_time_from_minutes."""
    return calculate_out_time_from_minutes(punch_in, target_hours * 60, settings, policy)


def _is_available(day: DayRecord, current: DayRecord) -> bool:
    if day.leave_type == LeaveType.FULL or day.punch_out:
        return False
    return day.id == current.id or day.status == DayStatus.FUTURE


def get_smart_suggestions(
    day: DayRecord,
    all_days: List[DayRecord],
    settings: UserSettings,
    policy: Optional[WorkPolicy] = None
) -> DaySuggestions:
    """
    Standard and adjusted punch-out suggestions for one day.

    Both are empty (status NONE) when the day has no punch-in, is already
    closed, or is a full leave day.
    """
    if not day.punch_in or day.punch_out or day.leave_type == LeaveType.FULL:
        return DaySuggestions(standard=SuggestionResult(), adjusted=SuggestionResult())

    policy = policy or WorkPolicy()

    standard_target = get_daily_expectation(day.leave_type, policy)
    standard = calculate_out_time(day.punch_in, standard_target, settings, policy)

    stats = calculate_week_stats(all_days, policy)
    other_days_worked = sum(d.gross_hours for d in all_days if d.id != day.id)
    remaining_needed = max(0.0, stats.required_total - other_days_worked)
    available_days = sum(1 for d in all_days if _is_available(d, day))

    adjusted_target = remaining_needed / max(1, available_days)
    adjusted = calculate_out_time(day.punch_in, adjusted_target, settings, policy)

    return DaySuggestions(standard=standard, adjusted=adjusted)
