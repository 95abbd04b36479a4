"""
Week Accounting Module

Derives weekly statistics (worked, required, deficit, projection) from the
five day records of a week.
"""

from typing import List, Optional

from .entities import DayRecord, DayStatus, LeaveType, WeekStats
from .time_codec import add_minutes_to_time, time_to_minutes
from config.config_manager import UserSettings, WorkPolicy


def get_daily_expectation(leave_type: LeaveType, policy: Optional[WorkPolicy] = None) -> float:
    """
    Hours a day is expected to contribute toward the weekly target.

    Args:
        leave_type: Leave taken on the day
        policy: Quota policy (defaults to WorkPolicy())

    Returns:
        Daily target for NONE, the half-day credit for HALF, 0 for FULL
    """
    policy = policy or WorkPolicy()
    if leave_type == LeaveType.FULL:
        return 0.0
    if leave_type == LeaveType.HALF:
        return policy.half_day_credit_hours
    return policy.daily_target_hours


def get_leave_deduction(leave_type: LeaveType, policy: Optional[WorkPolicy] = None) -> float:
    """Hours removed from the weekly target for a day's leave."""
    policy = policy or WorkPolicy()
    if leave_type == LeaveType.FULL:
        return policy.full_day_credit_hours
    if leave_type == LeaveType.HALF:
        return policy.half_day_credit_hours
    return 0.0


def _projected_hours(day: DayRecord, policy: WorkPolicy) -> float:
    expectation = get_daily_expectation(day.leave_type, policy)
    if day.punch_out:
        # Closed day
        return day.gross_hours
    if day.punch_in:
        # Still open, assume the daily target will be reached
        return max(day.gross_hours, expectation)
    if day.status in (DayStatus.FUTURE, DayStatus.PRESENT):
        return expectation
    # Past day without data: the hours are lost
    return 0.0


def _is_settled(day: DayRecord) -> bool:
    return day.status == DayStatus.PAST or bool(day.punch_out)


def calculate_week_stats(days: List[DayRecord], policy: Optional[WorkPolicy] = None) -> WeekStats:
    """
    Compute the aggregate statistics of a week.

    Args:
        days: Day records of the displayed week
        policy: Quota policy (defaults to WorkPolicy())

    Returns:
        WeekStats for the given days
    """
    policy = policy or WorkPolicy()

    total_worked = sum(day.gross_hours for day in days)
    total_leave_deduction = sum(get_leave_deduction(day.leave_type, policy) for day in days)
    projected_total = sum(_projected_hours(day, policy) for day in days)

    required_total = max(0.0, policy.weekly_target_hours - total_leave_deduction)
    remaining_weekly = max(0.0, required_total - total_worked)

    # Deficit only over days that can no longer change
    settled = [day for day in days if _is_settled(day)]
    expected_so_far = sum(get_daily_expectation(day.leave_type, policy) for day in settled)
    worked_so_far = sum(day.gross_hours for day in settled)
    weekly_deficit = max(0.0, expected_so_far - worked_so_far)

    return WeekStats(
        total_worked=total_worked,
        required_total=required_total,
        original_target=policy.weekly_target_hours,
        total_leave_deduction=total_leave_deduction,
        remaining_weekly=remaining_weekly,
        weekly_deficit=weekly_deficit,
        projected_total=projected_total,
        is_on_track=projected_total >= required_total - policy.on_track_tolerance_hours
    )


def late_threshold(settings: UserSettings) -> str:
    """Latest punch-in that still counts as on time."""
    return add_minutes_to_time(settings.standard_in_time, settings.late_buffer_minutes)


def is_late_arrival(punch_in: str, settings: UserSettings) -> bool:
    """Whether a recorded punch-in falls after the late threshold."""
    if not punch_in:
        return False
    return time_to_minutes(punch_in) > time_to_minutes(late_threshold(settings))
