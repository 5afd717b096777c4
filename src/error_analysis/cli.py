#!/usr/bin/env python3
"""CLI for analyzing a round-trip validation report.

Usage:
    python -m error_analysis.cli [--report data/error/report.json]
"""

import argparse
from pathlib import Path

from common.constants import ANALYSIS_FILENAME, REPORT_FILENAME
from common.env import env
from common.logger import error, get_logger, setup_logging, success
from roundtrip.models import ReportFormatError
from roundtrip.report_writer import read_report

from .analyzer import ErrorAnalyzer
from .patterns import DEFAULT_PATTERN_RULES, load_pattern_rules
from .reporters import AnalysisReporter

logger = get_logger(__name__)


def cmd_analyze(args) -> int:
    """Analyze a report and write error-analysis.txt next to it.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 if the report or pattern file is unusable)
    """
    report_path = Path(args.report)

    try:
        report = read_report(report_path)
    except (FileNotFoundError, ReportFormatError) as e:
        error(str(e))
        return 1

    rules = DEFAULT_PATTERN_RULES
    if args.patterns:
        try:
            rules = load_pattern_rules(Path(args.patterns))
        except (OSError, ValueError) as e:
            error(f"Could not load pattern rules: {e}")
            return 1

    logger.debug(f"Analyzing {len(report.results)} result(s) from {report_path}")

    analyzer = ErrorAnalyzer(pattern_rules=rules, top_codes=args.top_codes, top_files=args.top_files)
    text = AnalysisReporter().render_text(analyzer.analyze(report))

    output_path = report_path.parent / ANALYSIS_FILENAME
    try:
        output_path.write_text(text, encoding="utf-8")
    except OSError as e:
        error(f"Could not write analysis: {e}")
        return 1

    print(text, end="")
    success(f"Analysis written to {output_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Summarize errors from a round-trip report")
    parser.add_argument(
        "--report",
        "-r",
        type=str,
        default=str(env.error_dir() / REPORT_FILENAME),
        help="Path to report.json (default: data/error/report.json)",
    )
    parser.add_argument(
        "--patterns",
        type=str,
        help="JSON file with message-pattern rules (replaces the built-in rules)",
    )
    parser.add_argument(
        "--top-codes",
        type=int,
        default=15,
        help="Number of error codes to list (default: 15)",
    )
    parser.add_argument(
        "--top-files",
        type=int,
        default=10,
        help="Number of files to list (default: 10)",
    )

    args = parser.parse_args(argv)
    setup_logging(level=env.log_level())
    return cmd_analyze(args)


if __name__ == "__main__":
    exit(main())
