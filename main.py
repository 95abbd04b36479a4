"""
WorkSync Week Planner

Imports attendance text copied from the attendance portal into the current
week, prints the week statistics and punch-out suggestions, and writes the
week report.
"""

import argparse
import sys
from datetime import date
from pathlib import Path

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from application.week_service import AttendanceImportError, WeekService
from config.config_manager import ConfigManager
from domain.time_codec import decimal_to_duration
from domain.week_calendar import build_week


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile pasted attendance text against the weekly quota.")
    parser.add_argument("text_file", type=Path, help="File containing the pasted attendance text")
    parser.add_argument("--today", type=date.fromisoformat, default=None, help="Override today (YYYY-MM-DD)")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.json")
    parser.add_argument("--output", type=Path, default=None, help="Directory for the week report")
    parser.add_argument("--auto-plan", action="store_true", help="Spread the remaining hours over open days")
    parser.add_argument("--no-pdf", action="store_true", help="Skip the PDF report")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Application entry point."""
    args = _parse_args(argv)
    today = args.today or date.today()

    manager = ConfigManager(args.config)
    config = manager.load()
    service = WeekService.build_from_config(config)

    raw_text = args.text_file.read_text(encoding="utf-8")
    days = build_week(today)
    try:
        days = service.import_text(days, raw_text)
    except AttendanceImportError as e:
        print(f"Import failed: {e}", file=sys.stderr)
        return 1

    if args.auto_plan:
        days = service.auto_plan(days)

    summary = service.summarize(days)
    stats = summary.stats
    for day in days:
        suggestion = summary.suggestions[day.id]
        line = (
            f"{day.label:<10} {day.date_label}  in {day.punch_in or '--:--'}  "
            f"out {day.punch_out or '--:--'}  {decimal_to_duration(day.gross_hours):>8}  "
            f"{day.leave_type.value}"
        )
        if suggestion.standard.time:
            line += f"  std {suggestion.standard.time} / adj {suggestion.adjusted.time}"
        print(line)

    print(
        f"Worked {decimal_to_duration(stats.total_worked)} of {decimal_to_duration(stats.required_total)}, "
        f"remaining {decimal_to_duration(stats.remaining_weekly)}, "
        f"{'on track' if stats.is_on_track else 'action needed'}"
    )

    result = service.export_report(days, today, output_dir=args.output, generate_pdf=not args.no_pdf)
    print(f"Report written: {result.excel_path}")
    if result.pdf_path:
        print(f"PDF written: {result.pdf_path}")

    config.paths.last_import_file = str(args.text_file)
    manager.save()
    return 0


if __name__ == "__main__":
    sys.exit(main())
