"""
Week Service Module

Application layer service that orchestrates importing attendance text,
computing week statistics and suggestions, auto-planning and report export.
Keeps the engine free of I/O and presentation concerns.
"""

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List, Optional

from config.config_manager import AppConfig, OutputSettings, UserSettings, WorkPolicy
from domain.entities import DayRecord, WeekSummary
from domain.deficit_distributor import distribute_deficit
from domain.suggestion_engine import get_smart_suggestions
from domain.week_accounting import calculate_week_stats, is_late_arrival
from infrastructure.attendance_text_parser import AttendanceTextParser
from infrastructure.logger import get_logger

logger = get_logger("WeekService")


# ==============================================================================
# Custom Exceptions
# ==============================================================================
class AttendanceImportError(Exception):
    """Base exception for attendance import errors."""
    pass


class EmptyImportError(AttendanceImportError):
    """Raised when the pasted text is blank."""
    pass


class NoAttendanceDataError(AttendanceImportError):
    """
    Raised when the pasted text changed nothing in the displayed week.

    The caller should ask the user to copy the log rows again.
    """
    def __init__(self, message: str = None):
        self.message = message or (
            'No new data recognized. Ensure the copied text contains date rows '
            '(e.g. "Mon, 19 Jan"), gross hours (e.g. 7h 30m) or a late/on time status.'
        )
        super().__init__(self.message)


@dataclass
class ExportResult:
    """Result of report export."""
    success: bool
    excel_path: Path
    pdf_path: Optional[Path] = None
    error_message: str = ""


def has_changes(before: List[DayRecord], after: List[DayRecord]) -> bool:
    """Whether any day's punches, gross hours or leave type differ."""
    return any(
        old.punch_in != new.punch_in
        or old.punch_out != new.punch_out
        or old.gross_hours != new.gross_hours
        or old.leave_type != new.leave_type
        for old, new in zip(before, after)
    )


class WeekService:
    """
    Application service for one displayed week.

    This service:
    - Imports pasted attendance text into day records
    - Summarizes a week (statistics, suggestions, late arrivals)
    - Re-plans open days and exports reports
    """

    def __init__(
        self,
        settings: UserSettings,
        policy: Optional[WorkPolicy] = None,
        output_settings: Optional[OutputSettings] = None
    ):
        self.settings = settings
        self.policy = policy or WorkPolicy()
        self.output_settings = output_settings or OutputSettings()

    def import_text(self, days: List[DayRecord], raw_text: str) -> List[DayRecord]:
        """
        Merge pasted attendance text into the week.

        Raises:
            EmptyImportError: If raw_text is blank
            NoAttendanceDataError: If nothing in the week changed
        """
        if not raw_text or not raw_text.strip():
            raise EmptyImportError("Text is empty.")

        updated = AttendanceTextParser(self.settings).parse(raw_text, days)
        if not has_changes(days, updated):
            logger.warning("Import recognized no new data")
            raise NoAttendanceDataError()

        logger.info("Attendance text imported")
        return updated

    def summarize(self, days: List[DayRecord]) -> WeekSummary:
        """Statistics, per-day suggestions and late arrivals of the week."""
        stats = calculate_week_stats(days, self.policy)
        suggestions = {
            day.id: get_smart_suggestions(day, days, self.settings, self.policy)
            for day in days
        }
        late_day_ids = [day.id for day in days if is_late_arrival(day.punch_in, self.settings)]
        return WeekSummary(stats=stats, suggestions=suggestions, late_day_ids=late_day_ids)

    def auto_plan(self, days: List[DayRecord]) -> List[DayRecord]:
        """Spread the remaining requirement across unlocked days."""
        planned = distribute_deficit(days, self.settings, self.policy)
        logger.info("Auto-plan applied to open days")
        return planned

    def export_report(
        self,
        days: List[DayRecord],
        week_of: date,
        output_dir: Optional[Path] = None,
        generate_pdf: Optional[bool] = None
    ) -> ExportResult:
        """
        Write the week report as Excel and optionally PDF.

        A PDF failure is logged and reported in error_message without
        failing the export.

        Raises:
            OSError: If the Excel file cannot be written
        """
        from infrastructure.excel_writer import ExcelWriter
        from infrastructure.pdf_writer import PdfWriter, format_filename

        summary = self.summarize(days)
        out_dir = output_dir or Path(self.output_settings.output_dir or ".")
        excel_path = out_dir / format_filename(self.output_settings.filename_pattern, week_of)
        title = f"Week of {week_of.isoformat()}"

        logger.info(f"Writing Excel report: {excel_path}")
        ExcelWriter(self.settings, self.policy).create_report(
            days, summary.stats, excel_path, suggestions=summary.suggestions
        )

        if generate_pdf is None:
            generate_pdf = self.output_settings.generate_pdf
        if not generate_pdf:
            return ExportResult(success=True, excel_path=excel_path)

        pdf_dir = Path(self.output_settings.pdf_output_dir) if self.output_settings.pdf_output_dir else excel_path.parent
        pdf_path = pdf_dir / format_filename(self.output_settings.pdf_filename_pattern, week_of)
        try:
            PdfWriter(self.settings, self.policy).create_report(
                days, summary.stats, pdf_path, suggestions=summary.suggestions, title=title
            )
        except Exception as e:
            logger.error(f"PDF generation failed: {e}")
            return ExportResult(success=True, excel_path=excel_path, error_message=str(e))

        return ExportResult(success=True, excel_path=excel_path, pdf_path=pdf_path)

    @staticmethod
    def build_from_config(config: AppConfig) -> "WeekService":
        """Build a WeekService from AppConfig."""
        return WeekService(
            settings=config.settings,
            policy=config.policy,
            output_settings=config.output_settings
        )
