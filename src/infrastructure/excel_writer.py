"""
Excel Writer Module

Generates a formatted Excel report of one week: a row per day with punches,
gross hours and target, followed by the week statistics.
"""

from pathlib import Path
from typing import Dict, List, Optional

from openpyxl import Workbook
from openpyxl.styles import (
    Font, PatternFill, Alignment, Border, Side
)
from openpyxl.utils import get_column_letter

from domain.entities import DayRecord, DaySuggestions, LeaveType, WeekStats
from domain.time_codec import decimal_to_duration
from domain.week_accounting import get_daily_expectation, is_late_arrival
from config.config_manager import UserSettings, WorkPolicy
from infrastructure.logger import get_logger

logger = get_logger("ExcelWriter")


def hours_color(day: DayRecord, policy: Optional[WorkPolicy] = None) -> str:
    """
    Color name for a day's hours bar.

    gray for full leave, green when the day's target is met, purple for a
    worked half-day, blue otherwise.
    """
    target = get_daily_expectation(day.leave_type, policy)
    if day.leave_type == LeaveType.FULL:
        return 'gray'
    if day.gross_hours >= target and target > 0:
        return 'green'
    if day.leave_type == LeaveType.HALF:
        return 'purple'
    return 'blue'


class ExcelWriter:
    """
    Generates formatted Excel week reports.

    Output format:
    - Row 1: Column headers
    - Rows 2-6: One row per weekday
    - Below: Week statistics as label/value pairs

    Styling:
    - Hours cell colored like the week chart (gray/green/purple/blue)
    - Red punch-in cell for late arrivals
    """

    COLORS = {
        'green': PatternFill(start_color='10B981', end_color='10B981', fill_type='solid'),
        'red': PatternFill(start_color='FF6B6B', end_color='FF6B6B', fill_type='solid'),
        'blue': PatternFill(start_color='3B82F6', end_color='3B82F6', fill_type='solid'),
        'purple': PatternFill(start_color='8B5CF6', end_color='8B5CF6', fill_type='solid'),
        'gray': PatternFill(start_color='CBD5E1', end_color='CBD5E1', fill_type='solid'),
        'header': PatternFill(start_color='4472C4', end_color='4472C4', fill_type='solid'),
    }

    DARK_COLORS = ('green', 'blue', 'purple', 'header')

    HEADERS = [
        "Day", "Date", "Punch In", "Punch Out", "Gross Hours",
        "Target", "Leave", "Status", "Suggested Out", "Adjusted Out"
    ]

    BORDER = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    def __init__(self, settings: UserSettings = None, policy: WorkPolicy = None):
        self.settings = settings or UserSettings()
        self.policy = policy or WorkPolicy()
        self.wb: Optional[Workbook] = None

    def create_report(
        self,
        days: List[DayRecord],
        stats: WeekStats,
        output_path: Path,
        suggestions: Optional[Dict[str, DaySuggestions]] = None,
        title: str = "Week"
    ) -> Path:
        """
        Create the week report workbook.

        Args:
            days: Day records of the week
            stats: Statistics computed for these days
            output_path: Path to save the Excel file
            suggestions: Optional day id -> suggestions for open days
            title: Worksheet title

        Returns:
            Path to the created file
        """
        self.wb = Workbook()
        ws = self.wb.active
        ws.title = title[:31]

        self._write_days(ws, days, suggestions or {})
        self._write_stats(ws, stats, first_row=len(days) + 3)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(output_path)
        logger.info(f"Excel report saved: {output_path}")
        return output_path

    def _write_days(self, ws, days: List[DayRecord], suggestions: Dict[str, DaySuggestions]):
        """Write the header row and one row per day."""
        for col, header in enumerate(self.HEADERS, start=1):
            cell = ws.cell(1, col, header)
            cell.font = Font(bold=True, color='FFFFFF')
            cell.fill = self.COLORS['header']
            cell.alignment = Alignment(horizontal='center', vertical='center')
            cell.border = self.BORDER

        for row, day in enumerate(days, start=2):
            day_suggestions = suggestions.get(day.id)
            values = [
                day.label or day.id,
                day.date_label,
                day.punch_in or "-",
                day.punch_out or "-",
                decimal_to_duration(day.gross_hours),
                decimal_to_duration(get_daily_expectation(day.leave_type, self.policy)),
                day.leave_type.value,
                day.status.value,
                day_suggestions.standard.time if day_suggestions else "",
                day_suggestions.adjusted.time if day_suggestions else "",
            ]
            for col, value in enumerate(values, start=1):
                cell = ws.cell(row, col, value)
                cell.alignment = Alignment(horizontal='center')
                cell.border = self.BORDER

            self._apply_fill(ws.cell(row, 5), hours_color(day, self.policy))
            if is_late_arrival(day.punch_in, self.settings):
                self._apply_fill(ws.cell(row, 3), 'red')

        ws.column_dimensions['A'].width = 12
        for col in range(2, len(self.HEADERS) + 1):
            ws.column_dimensions[get_column_letter(col)].width = 14

    def _write_stats(self, ws, stats: WeekStats, first_row: int):
        """Write week statistics as label/value rows."""
        rows = [
            ("Worked", decimal_to_duration(stats.total_worked)),
            ("Required", decimal_to_duration(stats.required_total)),
            ("Original Target", decimal_to_duration(stats.original_target)),
            ("Leave Credit", decimal_to_duration(stats.total_leave_deduction)),
            ("Remaining", decimal_to_duration(stats.remaining_weekly)),
            ("Deficit So Far", decimal_to_duration(stats.weekly_deficit)),
            ("Projected", decimal_to_duration(stats.projected_total)),
            ("On Track", "Yes" if stats.is_on_track else "No"),
        ]
        for offset, (label, value) in enumerate(rows):
            label_cell = ws.cell(first_row + offset, 1, label)
            label_cell.font = Font(bold=True)
            label_cell.border = self.BORDER
            value_cell = ws.cell(first_row + offset, 2, value)
            value_cell.alignment = Alignment(horizontal='center')
            value_cell.border = self.BORDER

        on_track_cell = ws.cell(first_row + len(rows) - 1, 2)
        self._apply_fill(on_track_cell, 'green' if stats.is_on_track else 'red')

    def _apply_fill(self, cell, color: str):
        fill = self.COLORS.get(color)
        if fill:
            cell.fill = fill
            # White text on dark backgrounds
            if color in self.DARK_COLORS:
                cell.font = Font(color='FFFFFF')
