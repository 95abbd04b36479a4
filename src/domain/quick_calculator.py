"""
Quick Calculator Module

Minute-precision punch-out planner for today that works from worked
hour/minute totals per day instead of punch times.
"""

import math
from dataclasses import dataclass
from typing import Dict, Optional

from .entities import WEEK_DAYS, LeaveType, SuggestionResult, SuggestionStatus
from .suggestion_engine import calculate_out_time_from_minutes
from config.config_manager import UserSettings, WorkPolicy


@dataclass
class DayInput:
    """Worked time entered for one day."""
    hours: int = 0
    minutes: int = 0
    leave: LeaveType = LeaveType.NONE

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes


@dataclass
class QuickPlan:
    """Week totals in minutes plus the suggestion for today."""
    total_worked_minutes: int
    total_deduction_minutes: float
    adjusted_weekly_target_minutes: float
    remaining_needed_minutes: float
    available_days_count: int
    daily_target_minutes: int
    result: SuggestionResult


def plan_today(
    inputs: Dict[str, DayInput],
    today_index: int,
    punch_in: str,
    settings: UserSettings,
    policy: Optional[WorkPolicy] = None
) -> QuickPlan:
    """
    Plan today's punch-out from the time already worked this week.

    Args:
        inputs: Day id -> DayInput; missing days count as empty
        today_index: 0 for Monday through 4 for Friday
        punch_in: Today's punch-in "HH:MM" (may be empty)
        settings: Punch settings supplying the cap
        policy: Quota policy (defaults to WorkPolicy())

    Returns:
        QuickPlan with the week totals and today's SuggestionResult

    Raises:
        ValueError: If today_index is not a weekday index
    """
    if not 0 <= today_index < len(WEEK_DAYS):
        raise ValueError(f"today_index must be 0-{len(WEEK_DAYS) - 1}, got {today_index}")

    policy = policy or WorkPolicy()

    total_worked = 0
    total_deduction = 0.0
    available_days = 0

    for idx, (day_id, _) in enumerate(WEEK_DAYS):
        day_input = inputs.get(day_id) or DayInput()

        if day_input.leave == LeaveType.FULL:
            total_deduction += policy.full_day_credit_hours * 60
        elif day_input.leave == LeaveType.HALF:
            total_deduction += policy.half_day_credit_hours * 60

        if idx < today_index and day_input.leave != LeaveType.FULL:
            total_worked += day_input.total_minutes

        if idx >= today_index and day_input.leave != LeaveType.FULL:
            available_days += 1

    adjusted_target = max(0.0, policy.weekly_target_hours * 60 - total_deduction)
    remaining_needed = max(0.0, adjusted_target - total_worked)
    # Round up so today never falls behind the even spread
    daily_target = math.ceil(remaining_needed / max(1, available_days))

    today_id = WEEK_DAYS[today_index][0]
    today_input = inputs.get(today_id) or DayInput()
    if today_input.leave == LeaveType.FULL:
        result = SuggestionResult(time="Off Day", status=SuggestionStatus.OK, msg="Full Leave Selected")
    elif not punch_in:
        result = SuggestionResult(time="--:--", status=SuggestionStatus.NONE, msg="")
    else:
        result = calculate_out_time_from_minutes(punch_in, daily_target, settings, policy)

    return QuickPlan(
        total_worked_minutes=total_worked,
        total_deduction_minutes=total_deduction,
        adjusted_weekly_target_minutes=adjusted_target,
        remaining_needed_minutes=remaining_needed,
        available_days_count=available_days,
        daily_target_minutes=daily_target,
        result=result
    )
