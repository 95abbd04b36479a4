"""
Unit tests for PdfWriter and filename formatting.
"""

import pytest
from datetime import date
from pathlib import Path
import tempfile

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities import LeaveType
from domain.week_accounting import calculate_week_stats
from domain.week_calendar import apply_day_edit, build_week
from infrastructure.pdf_writer import PdfWriter, WeekPdf, format_filename


class TestFormatFilename:
    """Tests for format_filename utility function."""

    def test_basic_formatting(self):
        result = format_filename("WorkSync_{year}_W{week}.pdf", date(2026, 1, 21))
        assert result == "WorkSync_2026_W04.pdf"

    def test_iso_year_at_year_boundary(self):
        """Dec 29 2025 belongs to ISO week 1 of 2026."""
        result = format_filename("Report_{year}_{week}.pdf", date(2025, 12, 29))
        assert result == "Report_2026_01.pdf"


class TestPdfWriter:
    """Tests for PdfWriter class."""

    def test_create_report_empty_list(self):
        """Test that an empty week returns early."""
        writer = PdfWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / "test.pdf"

            writer.create_report([], calculate_week_stats([]), output_path)

            assert not output_path.exists()

    def test_create_report(self):
        days = build_week(date(2026, 1, 21))
        days = apply_day_edit(days, "mon", "punch_in", "11:20")
        days = apply_day_edit(days, "mon", "punch_out", "18:48")
        days = apply_day_edit(days, "tue", "leave_type", LeaveType.FULL)

        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / "nested" / "week.pdf"

            PdfWriter().create_report(days, calculate_week_stats(days), output_path, title="Week of 2026-01-19")

            assert output_path.exists()
            assert output_path.read_bytes().startswith(b"%PDF")

    def test_week_pdf_title(self):
        pdf = WeekPdf(title="Week of 2026-01-19")
        assert pdf.title_text == "Week of 2026-01-19"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
