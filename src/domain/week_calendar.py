"""
Week Calendar Module

Builds the five day records of a displayed week and applies single-field
edits to them.
"""

from dataclasses import replace
from datetime import date, timedelta
from typing import List, Optional

from .entities import WEEK_DAYS, DayRecord, DayStatus, LeaveType
from .time_codec import calculate_duration

EDITABLE_FIELDS = ("punch_in", "punch_out", "leave_type")


def format_date_label(day: date) -> str:
    """Format a date as "Jan 05"."""
    return day.strftime("%b %d")


def day_status(day: date, today: date) -> DayStatus:
    """PRESENT for today, PAST before it, FUTURE after it."""
    if day == today:
        return DayStatus.PRESENT
    if day < today:
        return DayStatus.PAST
    return DayStatus.FUTURE


def week_start(reference: date) -> date:
    """Monday of the week containing reference."""
    return reference - timedelta(days=reference.weekday())


def build_week(today: date, reference: Optional[date] = None) -> List[DayRecord]:
    """
    Create empty Monday-Friday records for the week containing reference.

    Args:
        today: The current date, used for is_today and status
        reference: Any date of the week to display (defaults to today)

    Returns:
        Five DayRecord objects, Monday first
    """
    monday = week_start(reference or today)
    days = []
    for offset, (day_id, label) in enumerate(WEEK_DAYS):
        current = monday + timedelta(days=offset)
        days.append(DayRecord(
            id=day_id,
            label=label,
            date_label=format_date_label(current),
            is_today=current == today,
            status=day_status(current, today)
        ))
    return days


def apply_day_edit(days: List[DayRecord], day_id: str, field: str, value) -> List[DayRecord]:
    """
    Replace one field of one day and re-derive its gross hours.

    A day on FULL leave never keeps punches or hours, whichever field was
    edited.

    Raises:
        ValueError: If field is not one of EDITABLE_FIELDS
    """
    if field not in EDITABLE_FIELDS:
        raise ValueError(f"Field '{field}' cannot be edited")

    result = []
    for day in days:
        if day.id != day_id:
            result.append(day)
            continue

        updated = replace(day, **{field: value})
        if updated.leave_type == LeaveType.FULL:
            updated = replace(updated, punch_in="", punch_out="")
        updated = replace(
            updated,
            gross_hours=calculate_duration(updated.punch_in, updated.punch_out)
        )
        result.append(updated)
    return result


def reset_day(days: List[DayRecord], day_id: str) -> List[DayRecord]:
    """Clear the punches and gross hours of one day."""
    return [
        replace(day, punch_in="", punch_out="", gross_hours=0.0) if day.id == day_id else day
        for day in days
    ]
