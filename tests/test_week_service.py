"""
Unit tests for WeekService: import, summary, auto-plan and export.
"""

import pytest
from datetime import date
from pathlib import Path
import tempfile

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from application.week_service import (
    EmptyImportError, NoAttendanceDataError, WeekService, has_changes
)
from config.config_manager import AppConfig, OutputSettings, UserSettings
from domain.entities import LeaveType, SuggestionStatus
from domain.week_calendar import apply_day_edit, build_week


TODAY = date(2026, 1, 21)

PORTAL_TEXT = """Attendance Log
Mon, 19 Jan
7h 28m
0:50:45 late
Tue, 20 JanLeave
Wed, 21 Jan
2h 10m
On Time
"""


@pytest.fixture
def service():
    return WeekService(UserSettings())


class TestImportText:
    """Tests for WeekService.import_text."""

    def test_import(self, service):
        days = service.import_text(build_week(TODAY), PORTAL_TEXT)

        assert days[0].punch_in == "11:20"
        assert days[0].punch_out == "18:48"
        assert days[1].leave_type == LeaveType.FULL
        assert days[2].punch_in == "10:30"
        assert days[2].punch_out == ""

    def test_blank_text(self, service):
        with pytest.raises(EmptyImportError):
            service.import_text(build_week(TODAY), "   \n ")

    def test_unrecognized_text(self, service):
        with pytest.raises(NoAttendanceDataError) as exc_info:
            service.import_text(build_week(TODAY), "nothing useful here")
        assert "No new data recognized" in str(exc_info.value)

    def test_reimport_changes_nothing(self, service):
        days = service.import_text(build_week(TODAY), PORTAL_TEXT)
        with pytest.raises(NoAttendanceDataError):
            service.import_text(days, PORTAL_TEXT)


class TestHasChanges:
    """Tests for has_changes."""

    def test_detects_edit(self):
        before = build_week(TODAY)
        after = apply_day_edit(before, "thu", "leave_type", LeaveType.HALF)

        assert has_changes(before, after) is True
        assert has_changes(before, list(before)) is False


class TestSummaryAndPlan:
    """Tests for summarize and auto_plan."""

    def test_summarize(self, service):
        days = service.import_text(build_week(TODAY), PORTAL_TEXT)

        summary = service.summarize(days)

        assert summary.stats.required_total == 38.0
        assert summary.late_day_ids == ["mon"]
        assert summary.suggestions["wed"].standard.status == SuggestionStatus.OK
        assert summary.suggestions["mon"].standard.status == SuggestionStatus.NONE

    def test_auto_plan_fills_open_days(self, service):
        days = service.import_text(build_week(TODAY), PORTAL_TEXT)

        planned = service.auto_plan(days)

        assert planned[0] is days[0]
        assert planned[2].punch_in == "10:30"
        assert planned[3].punch_out != ""
        assert planned[4].punch_out == planned[3].punch_out


class TestExportReport:
    """Tests for export_report."""

    def test_excel_only(self, service):
        days = build_week(TODAY)

        with tempfile.TemporaryDirectory() as tmpdir:
            result = service.export_report(days, TODAY, output_dir=Path(tmpdir), generate_pdf=False)

            assert result.success is True
            assert result.excel_path == Path(tmpdir) / "WorkSync_2026_W04.xlsx"
            assert result.excel_path.exists()
            assert result.pdf_path is None

    def test_excel_and_pdf(self, service):
        days = service.import_text(build_week(TODAY), PORTAL_TEXT)

        with tempfile.TemporaryDirectory() as tmpdir:
            result = service.export_report(days, TODAY, output_dir=Path(tmpdir), generate_pdf=True)

            assert result.excel_path.exists()
            assert result.pdf_path == Path(tmpdir) / "WorkSync_2026_W04.pdf"
            assert result.pdf_path.exists()
            assert result.error_message == ""

    def test_build_from_config(self):
        config = AppConfig(output_settings=OutputSettings(generate_pdf=False))
        service = WeekService.build_from_config(config)

        assert service.settings is config.settings
        assert service.output_settings.generate_pdf is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
