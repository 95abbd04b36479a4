"""
PDF Writer Module

Generates a PDF week report using fpdf2, mirroring the Excel report: a day
table followed by the week statistics.
"""

from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from fpdf import FPDF

from domain.entities import DayRecord, DaySuggestions, WeekStats
from domain.time_codec import decimal_to_duration
from domain.week_accounting import get_daily_expectation, is_late_arrival
from config.config_manager import UserSettings, WorkPolicy
from infrastructure.excel_writer import hours_color
from infrastructure.logger import get_logger

logger = get_logger("PdfWriter")

FONT_FAMILY = "Helvetica"


# ==============================================================================
# WeekPdf Class (A4 Landscape)
# ==============================================================================
class WeekPdf(FPDF):
    """FPDF document with a centered title header and page-number footer."""

    def __init__(self, title: str = ""):
        super().__init__(orientation='L', unit='mm', format='A4')
        self.title_text = title

    def header(self) -> None:
        """Draw page header with centered title."""
        self.set_font(FONT_FAMILY, 'B', 14)
        self.cell(0, 10, self.title_text, align='C', new_x='LMARGIN', new_y='NEXT')
        self.ln(3)

    def footer(self) -> None:
        """Draw page footer with page number."""
        self.set_y(-12)
        self.set_font(FONT_FAMILY, '', 8)
        self.cell(0, 10, f'Page {self.page_no()}/{{nb}}', align='C')


# ==============================================================================
# PdfWriter Class
# ==============================================================================
class PdfWriter:
    """
    Generates PDF week reports that replicate the Excel layout.

    Features:
    - One row per weekday with punches, hours, target and suggestions
    - Hours cell colored like the week chart
    - Statistics block below the table
    """

    # RGB Color definitions (matching ExcelWriter)
    COLORS: Dict[str, Tuple[int, int, int]] = {
        'green': (16, 185, 129),
        'red': (255, 107, 107),
        'blue': (59, 130, 246),
        'purple': (139, 92, 246),
        'gray': (203, 213, 225),
        'header': (68, 114, 196),
        'white': (255, 255, 255),
    }

    COLUMNS: List[Tuple[str, float]] = [
        ("Day", 30), ("Date", 25), ("Punch In", 25), ("Punch Out", 25),
        ("Gross Hours", 30), ("Target", 25), ("Leave", 20), ("Status", 25),
        ("Suggested Out", 31), ("Adjusted Out", 31),
    ]

    ROW_HEIGHT = 8

    def __init__(self, settings: Optional[UserSettings] = None, policy: Optional[WorkPolicy] = None):
        self._settings = settings or UserSettings()
        self._policy = policy or WorkPolicy()

    def create_report(
        self,
        days: List[DayRecord],
        stats: WeekStats,
        output_path: Path,
        suggestions: Optional[Dict[str, DaySuggestions]] = None,
        title: str = "Weekly Hours"
    ) -> None:
        """
        Create the week PDF. Nothing is written when days is empty.
        """
        if not days:
            return

        pdf = WeekPdf(title=title)
        pdf.alias_nb_pages()
        pdf.add_page()

        self._draw_header_row(pdf)
        for day in days:
            self._draw_day_row(pdf, day, (suggestions or {}).get(day.id))

        pdf.ln(6)
        self._draw_stats(pdf, stats)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        pdf.output(str(output_path))
        logger.info(f"PDF report saved: {output_path}")

    def _draw_header_row(self, pdf: WeekPdf) -> None:
        pdf.set_font(FONT_FAMILY, 'B', 10)
        pdf.set_fill_color(*self.COLORS['header'])
        pdf.set_text_color(255, 255, 255)
        for header, width in self.COLUMNS:
            pdf.cell(width, self.ROW_HEIGHT, header, border=1, align='C', fill=True)
        pdf.ln(self.ROW_HEIGHT)

    def _draw_day_row(self, pdf: WeekPdf, day: DayRecord, suggestions: Optional[DaySuggestions]) -> None:
        values = [
            day.label or day.id,
            day.date_label,
            day.punch_in or "-",
            day.punch_out or "-",
            decimal_to_duration(day.gross_hours),
            decimal_to_duration(get_daily_expectation(day.leave_type, self._policy)),
            day.leave_type.value,
            day.status.value,
            suggestions.standard.time if suggestions else "",
            suggestions.adjusted.time if suggestions else "",
        ]
        fills = {4: self.COLORS[hours_color(day, self._policy)]}
        if is_late_arrival(day.punch_in, self._settings):
            fills[2] = self.COLORS['red']

        pdf.set_font(FONT_FAMILY, '', 9)
        for col, ((_, width), text) in enumerate(zip(self.COLUMNS, values)):
            fill_color = fills.get(col)
            self._draw_cell(pdf, width, text, fill_color)
        pdf.ln(self.ROW_HEIGHT)

    def _draw_cell(self, pdf: WeekPdf, width: float, text: str, fill_color: Optional[Tuple[int, int, int]]) -> None:
        if fill_color:
            pdf.set_fill_color(*fill_color)
        if fill_color and self._is_fill_dark(fill_color):
            pdf.set_text_color(255, 255, 255)
        else:
            pdf.set_text_color(0, 0, 0)
        pdf.cell(width, self.ROW_HEIGHT, text, border=1, align='C', fill=bool(fill_color))

    def _draw_stats(self, pdf: WeekPdf, stats: WeekStats) -> None:
        rows = [
            ("Worked", decimal_to_duration(stats.total_worked)),
            ("Required", decimal_to_duration(stats.required_total)),
            ("Leave Credit", decimal_to_duration(stats.total_leave_deduction)),
            ("Remaining", decimal_to_duration(stats.remaining_weekly)),
            ("Deficit So Far", decimal_to_duration(stats.weekly_deficit)),
            ("Projected", decimal_to_duration(stats.projected_total)),
            ("On Track", "Yes" if stats.is_on_track else "No"),
        ]
        for label, value in rows:
            pdf.set_font(FONT_FAMILY, 'B', 9)
            pdf.set_text_color(0, 0, 0)
            pdf.cell(40, self.ROW_HEIGHT, label, border=1)
            pdf.set_font(FONT_FAMILY, '', 9)
            pdf.cell(40, self.ROW_HEIGHT, value, border=1, align='C')
            pdf.ln(self.ROW_HEIGHT)

    def _is_fill_dark(self, rgb: Tuple[int, int, int]) -> bool:
        """Check if RGB color is dark (needs white text)."""
        r, g, b = rgb
        luminance = (0.299 * r + 0.587 * g + 0.114 * b)
        return luminance < 128


# ==============================================================================
# Utility Functions
# ==============================================================================
def format_filename(pattern: str, week_of: date) -> str:
    """Format filename pattern with {year} and ISO {week} placeholders."""
    iso_year, iso_week, _ = week_of.isocalendar()
    return pattern.format(
        year=iso_year,
        week=f"{iso_week:02d}"
    )
