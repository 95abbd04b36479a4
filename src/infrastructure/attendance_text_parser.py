"""
Attendance Text Parser Module

Extracts attendance facts from text copied out of the attendance portal's
log table and merges them into the week's day records.

The text is scanned line by line with a single cursor: a date line such as
"Mon, 19 Jan" selects the day being described (or clears the cursor when the
date is outside the displayed week), and the following lines contribute
durations ("7h 28m"), arrival status ("0:50:45 late" / "On Time") and leave
keywords to that day.
"""

import re
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from domain.entities import ArrivalStatus, DayEvidence, DayRecord, LeaveType
from domain.time_codec import add_minutes_to_time
from config.config_manager import UserSettings
from infrastructure.logger import get_logger

logger = get_logger("AttendanceTextParser")


DATE_LINE_PATTERN = re.compile(r'^(Mon|Tue|Wed|Thu|Fri|Sat|Sun),\s+(\d{1,2})\s+([A-Za-z]{3})')

# Tags the portal appends to the date cell, sometimes glued to the month ("16 JanLeave")
INLINE_LEAVE_PATTERN = re.compile(r'(Leave|HLDY|W-OFF|Holiday)', re.IGNORECASE)

DURATION_PATTERN = re.compile(r'(\d+)h\s+(\d+)m')
LATE_PATTERN = re.compile(r'(\d+):(\d+)(?::\d+)?\s+late', re.IGNORECASE)
ON_TIME_PATTERN = re.compile(r'\bon\s+time\b', re.IGNORECASE)
LEAVE_KEYWORD_PATTERN = re.compile(
    r'\b(Holiday|Paid Leave|Unpaid Leave|Sick Leave|Casual Leave|Weekly-off)\b',
    re.IGNORECASE
)

DATE_LABEL_PATTERN = re.compile(r'^\s*([A-Za-z]{3})\s+(\d{1,2})\s*$')


# ==============================================================================
# Scan State
# ==============================================================================
@dataclass(frozen=True)
class ScanState:
    """Cursor of the scan: idle, or inside the block of one day."""
    day_id: Optional[str] = None

    @property
    def is_idle(self) -> bool:
        return self.day_id is None


IDLE = ScanState()


@dataclass(frozen=True)
class DateLine:
    """A recognized date header; day_id is None for dates outside the week."""
    day_id: Optional[str]
    inline_leave: bool = False


@dataclass(frozen=True)
class LineFacts:
    """Attendance facts found on a single line."""
    duration_minutes: int = 0
    arrival: ArrivalStatus = ArrivalStatus.UNKNOWN
    late_minutes: int = 0
    has_leave_keyword: bool = False


# ==============================================================================
# Pure line functions
# ==============================================================================
def _date_key(month: str, day_of_month: str) -> Tuple[str, int]:
    return (month.lower(), int(day_of_month))


def build_date_index(days: List[DayRecord]) -> Dict[Tuple[str, int], str]:
    """Map (month, day-of-month) to day id from each day's date_label."""
    index = {}
    for day in days:
        match = DATE_LABEL_PATTERN.match(day.date_label or "")
        if match:
            index[_date_key(match.group(1), match.group(2))] = day.id
    return index


def read_date_line(line: str, date_index: Dict[Tuple[str, int], str]) -> Optional[DateLine]:
    """
    Recognize a date header line.

    Returns:
        None when the line is not a date line, otherwise a DateLine whose
        day_id is the matching day or None when the date is not displayed
    """
    match = DATE_LINE_PATTERN.match(line.strip())
    if not match:
        return None
    day_id = date_index.get(_date_key(match.group(3), match.group(2)))
    rest = line.strip()[match.end(2):]
    return DateLine(day_id=day_id, inline_leave=bool(INLINE_LEAVE_PATTERN.search(rest)))


def next_state(state: ScanState, date_line: Optional[DateLine]) -> ScanState:
    """A date line moves the cursor to its day (or clears it); other lines keep it."""
    if date_line is None:
        return state
    return ScanState(day_id=date_line.day_id)


def read_line_facts(line: str) -> LineFacts:
    """Extract duration, arrival status and leave keyword facts from a line."""
    duration = 0
    for match in DURATION_PATTERN.finditer(line):
        duration = max(duration, int(match.group(1)) * 60 + int(match.group(2)))

    arrival = ArrivalStatus.UNKNOWN
    late_minutes = 0
    late_match = LATE_PATTERN.search(line)
    if late_match:
        arrival = ArrivalStatus.LATE
        late_minutes = int(late_match.group(1)) * 60 + int(late_match.group(2))
    elif ON_TIME_PATTERN.search(line):
        arrival = ArrivalStatus.ON_TIME

    return LineFacts(
        duration_minutes=duration,
        arrival=arrival,
        late_minutes=late_minutes,
        has_leave_keyword=bool(LEAVE_KEYWORD_PATTERN.search(line))
    )


def accumulate(evidence: DayEvidence, facts: LineFacts) -> DayEvidence:
    """Fold one line's facts into a day's evidence (max duration, last status wins)."""
    arrival = evidence.arrival
    late_minutes = evidence.late_minutes
    if facts.arrival != ArrivalStatus.UNKNOWN:
        arrival = facts.arrival
        late_minutes = facts.late_minutes
    return DayEvidence(
        max_duration_minutes=max(evidence.max_duration_minutes, facts.duration_minutes),
        arrival=arrival,
        late_minutes=late_minutes,
        has_leave_tag=evidence.has_leave_tag or facts.has_leave_keyword
    )


def resolve_day(day: DayRecord, evidence: DayEvidence, settings: UserSettings) -> DayRecord:
    """
    Turn a day's accumulated evidence into an updated record.

    Hours found beat any leave tag. An in-progress day (is_today) never gets
    an inferred punch-out.
    """
    minutes = evidence.max_duration_minutes
    if minutes > 0:
        if evidence.arrival == ArrivalStatus.LATE:
            punch_in = add_minutes_to_time(settings.standard_in_time, evidence.late_minutes)
        elif evidence.arrival == ArrivalStatus.ON_TIME:
            punch_in = settings.standard_in_time
        else:
            punch_in = ""

        punch_out = ""
        if punch_in and not day.is_today:
            punch_out = add_minutes_to_time(punch_in, minutes)

        return replace(
            day,
            punch_in=punch_in,
            punch_out=punch_out,
            gross_hours=round(minutes / 60, 4),
            leave_type=LeaveType.NONE
        )

    if evidence.has_leave_tag:
        return replace(day, punch_in="", punch_out="", gross_hours=0.0, leave_type=LeaveType.FULL)

    return day


# ==============================================================================
# AttendanceTextParser Class
# ==============================================================================
class AttendanceTextParser:
    """
    Parses attendance text pasted from the portal.

    Handles:
    - Correlating "Mon, 19 Jan" headers with the displayed week
    - Ignoring blocks of dates outside the displayed week
    - Reading repeated running totals and keeping the largest
    - Deriving punch times from the arrival status and the standard start
    """

    def __init__(self, settings: UserSettings):
        self.settings = settings

    def scan(self, raw_text: str, days: List[DayRecord]) -> Dict[str, DayEvidence]:
        """
        Collect evidence per day id in a single forward pass.

        Args:
            raw_text: Pasted text
            days: Day records of the displayed week

        Returns:
            Dictionary mapping day ids to their accumulated evidence
        """
        date_index = build_date_index(days)
        evidence: Dict[str, DayEvidence] = {}
        state = IDLE
        skipped_blocks = 0

        for line in (raw_text or "").splitlines():
            date_line = read_date_line(line, date_index)
            state = next_state(state, date_line)

            if date_line is not None and state.is_idle:
                skipped_blocks += 1

            if state.is_idle:
                continue

            current = evidence.get(state.day_id, DayEvidence())
            if date_line is not None and date_line.inline_leave:
                current = replace(current, has_leave_tag=True)
            evidence[state.day_id] = accumulate(current, read_line_facts(line))

        if skipped_blocks:
            logger.debug(f"Skipped {skipped_blocks} date block(s) outside the displayed week")
        return evidence

    def parse(self, raw_text: str, days: List[DayRecord]) -> List[DayRecord]:
        """
        Merge the facts found in raw_text into the day records.

        Args:
            raw_text: Pasted text
            days: Day records of the displayed week (not modified)

        Returns:
            New list with the same length and order as days
        """
        evidence = self.scan(raw_text, days)
        result = [
            resolve_day(day, evidence[day.id], self.settings) if day.id in evidence else day
            for day in days
        ]

        changed = [new.id for old, new in zip(days, result) if old != new]
        logger.debug(
            f"Parsed {len(evidence)} day block(s), updated: {', '.join(changed) or 'none'}"
        )
        return result


def parse_attendance_text(
    raw_text: str,
    days: List[DayRecord],
    settings: UserSettings
) -> List[DayRecord]:
    """Convenience wrapper around AttendanceTextParser.parse."""
    return AttendanceTextParser(settings).parse(raw_text, days)
