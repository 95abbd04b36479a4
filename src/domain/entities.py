"""
Domain Entities Module

Core domain entities using dataclasses for the week time-accounting system.
These entities represent the core business concepts independent of infrastructure.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


class LeaveType(Enum):
    """Leave taken on a day."""
    NONE = "NONE"
    HALF = "HALF"   # half-day credit
    FULL = "FULL"   # whole day off, no punches


class DayStatus(Enum):
    """Position of a day relative to today."""
    FUTURE = "FUTURE"
    PRESENT = "PRESENT"  # only the is_today day
    PAST = "PAST"
    LEAVE = "LEAVE"
    WEEKEND = "WEEKEND"


class SuggestionStatus(Enum):
    """Outcome of a punch-out suggestion."""
    OK = "ok"
    SUGGESTION = "suggestion"    # target only reachable with half-day credits
    IMPOSSIBLE = "impossible"
    NONE = "none"
    LATE = "late"


class ArrivalStatus(Enum):
    """Arrival status read from imported attendance text."""
    UNKNOWN = "UNKNOWN"
    ON_TIME = "ON_TIME"
    LATE = "LATE"


WEEK_DAYS = [
    ("mon", "Monday"),
    ("tue", "Tuesday"),
    ("wed", "Wednesday"),
    ("thu", "Thursday"),
    ("fri", "Friday"),
]


@dataclass
class DayRecord:
    """
    One weekday (Mon-Fri) of the displayed week.

    Attributes:
        id: Weekday identifier ('mon'..'fri')
        date_label: Calendar date as "Mon DD", e.g. "Jan 19"
        label: Full weekday name
        is_today: True for at most one day per week
        punch_in: "HH:MM" or "" when not recorded
        punch_out: "HH:MM" or "" when not recorded
        gross_hours: Worked hours in decimal form
        leave_type: Leave taken on this day
        status: Position relative to today
    """
    id: str
    date_label: str
    label: str = ""
    is_today: bool = False
    punch_in: str = ""
    punch_out: str = ""
    gross_hours: float = 0.0
    leave_type: LeaveType = LeaveType.NONE
    status: DayStatus = DayStatus.FUTURE


@dataclass
class WeekStats:
    """
    Aggregate statistics for one week, all in decimal hours.

    Attributes:
        total_worked: Sum of gross hours
        required_total: Weekly target after leave credits
        original_target: Weekly target before leave credits
        total_leave_deduction: Hours credited for leave
        remaining_weekly: Hours still to work to reach required_total
        weekly_deficit: Shortfall over settled days
        projected_total: Expected week total if open days meet their targets
        is_on_track: Whether the projection reaches the requirement
    """
    total_worked: float = 0.0
    required_total: float = 0.0
    original_target: float = 0.0
    total_leave_deduction: float = 0.0
    remaining_weekly: float = 0.0
    weekly_deficit: float = 0.0
    projected_total: float = 0.0
    is_on_track: bool = False


@dataclass
class SuggestionResult:
    """A suggested punch-out time with its rationale."""
    time: str = ""
    status: SuggestionStatus = SuggestionStatus.NONE
    msg: str = ""


@dataclass
class DaySuggestions:
    """Standard (own target) and adjusted (week spread) suggestions for a day."""
    standard: SuggestionResult = field(default_factory=SuggestionResult)
    adjusted: SuggestionResult = field(default_factory=SuggestionResult)


@dataclass
class DayEvidence:
    """
    Facts collected for one day while scanning imported text.

    Attributes:
        max_duration_minutes: Largest "Nh Nm" reading seen
        arrival: Last arrival status seen
        late_minutes: Lateness of the last "late" reading
        has_leave_tag: Whether a leave/holiday keyword was seen
    """
    max_duration_minutes: int = 0
    arrival: ArrivalStatus = ArrivalStatus.UNKNOWN
    late_minutes: int = 0
    has_leave_tag: bool = False


@dataclass
class WeekSummary:
    """Statistics and per-day suggestions for a displayed week."""
    stats: WeekStats
    suggestions: Dict[str, DaySuggestions] = field(default_factory=dict)
    late_day_ids: List[str] = field(default_factory=list)
