"""Persist and reload batch reports."""

import json
from pathlib import Path

from common.constants import LOG_FILENAME, REPORT_FILENAME

from .models import BatchReport, FileResult, FileStatus, ReportFormatError


def format_log_line(result: FileResult) -> str:
    """Format one flat log line for a file result."""
    if result.status == FileStatus.PASSED:
        return f"{result.input}: PASSED"
    if result.status == FileStatus.FAILED:
        return f"{result.input}: FAILED ({result.error_count} errors)"
    return f"{result.input}: ERROR ({result.message})"


def format_log(report: BatchReport) -> str:
    """Format the flat log, one line per file in report order."""
    return "\n".join(format_log_line(r) for r in report.results)


def write_report(report: BatchReport, out_dir: Path) -> tuple[Path, Path]:
    """Write report.json and log.txt into the output directory.

    Args:
        report: Batch report to persist
        out_dir: Output directory (created if missing)

    Returns:
        Tuple of (report_path, log_path)
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    report_path = out_dir / REPORT_FILENAME
    log_path = out_dir / LOG_FILENAME

    with open(report_path, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)

    log_path.write_text(format_log(report), encoding="utf-8")

    return report_path, log_path


def read_report(report_path: Path) -> BatchReport:
    """Load a persisted report.

    Raises:
        FileNotFoundError: If the report doesn't exist
        ReportFormatError: If the file is not a valid report
    """
    if not report_path.exists():
        raise FileNotFoundError(f"Report not found: {report_path}")

    try:
        with open(report_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ReportFormatError(f"Report is not valid JSON: {e}") from e

    return BatchReport.from_dict(data)
