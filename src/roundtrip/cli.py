#!/usr/bin/env python3
"""CLI for round-trip validation of score files.

Usage:
    python -m roundtrip.cli --in data/raw --out data/error [--dry-run] [--verbose]
"""

import argparse
from pathlib import Path

from common.env import env, normalize_extension
from common.logger import error, get_logger, progress, setup_logging, success, warning

from .backends.alphatab import AlphaTabBackend
from .backends.base import BackendNotFoundError, ScoreBackend
from .models import FileResult, FileStatus
from .report_writer import write_report
from .runner import ArtifactStore, BatchRunner, list_score_files
from .validator import RoundTripValidator

logger = get_logger(__name__)

EXIT_SETUP_FAILURE = 1
EXIT_BACKEND_MISSING = 2


def print_progress(index: int, total: int, result: FileResult) -> None:
    """Print one progress line: '[3/80] Song.gp5 ... FAILED (12 errors)'."""
    if result.status == FileStatus.PASSED:
        outcome = "OK"
    elif result.status == FileStatus.FAILED:
        outcome = f"FAILED ({result.error_count} errors)"
    else:
        outcome = f"ERROR ({result.message})"
    progress(f"[{index}/{total}] {result.input} ... {outcome}")


def cmd_validate(args, backend: ScoreBackend | None = None) -> int:
    """Run round-trip validation over the input directory.

    Args:
        args: Parsed command-line arguments
        backend: Score backend (default: alphaTab through Node.js)

    Returns:
        Exit code (0 when the run completed, non-zero for setup failures)
    """
    in_dir = Path(args.in_dir).resolve()
    out_dir = Path(args.out_dir).resolve()
    extensions = tuple(normalize_extension(e) for e in args.ext) if args.ext else env.score_extensions()

    progress(f"Input dir: {in_dir}")
    progress(f"Output dir: {out_dir}")
    progress(f"Dry-run: {'true' if args.dry_run else 'false'}")

    if not in_dir.is_dir():
        error(f"Input directory '{in_dir}' does not exist")
        return EXIT_SETUP_FAILURE

    backend = backend or AlphaTabBackend()
    try:
        description = backend.check_available()
    except BackendNotFoundError as e:
        error(str(e))
        return EXIT_BACKEND_MISSING
    logger.debug(f"Using backend: {description}")

    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        names = list_score_files(in_dir, extensions)
    except OSError as e:
        error(f"Setup failed: {e}")
        return EXIT_SETUP_FAILURE

    if not names:
        warning(f"No files matching {', '.join(extensions)} in {in_dir}")
    logger.debug(f"Found {len(names)} file(s) matching {', '.join(extensions)}")

    runner = BatchRunner(
        RoundTripValidator(backend),
        ArtifactStore(in_dir, out_dir),
        dry_run=args.dry_run,
        observer=print_progress,
    )
    report = runner.run(names)

    try:
        report_path, log_path = write_report(report, out_dir)
    except OSError as e:
        error(f"Could not write report: {e}")
        return EXIT_SETUP_FAILURE

    progress("\nSummary:")
    progress(f"  Total: {report.total_files}")
    progress(f"  Passed: {report.passed}")
    progress(f"  Failed: {report.failed}")
    if report.errored:
        progress(f"  Errors: {report.errored}")
    success(f"Report: {report_path}")
    success(f"Log: {log_path}")

    if args.verbose:
        progress("\nDetailed results saved to report.json")

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export score files to alphaTex, re-import them and record failures"
    )
    parser.add_argument(
        "--in",
        "--input",
        dest="in_dir",
        type=str,
        default=str(env.raw_dir()),
        help="Directory containing score files (default: data/raw)",
    )
    parser.add_argument(
        "--out",
        "--output",
        dest="out_dir",
        type=str,
        default=str(env.error_dir()),
        help="Directory for report, log and failing artifacts (default: data/error)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate without copying failing scores or saving their alphaTex",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show extra progress detail",
    )
    parser.add_argument(
        "--ext",
        action="append",
        default=None,
        help="Score file suffix to validate, repeatable (default: .gp5)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)
    setup_logging(level="DEBUG" if args.verbose else env.log_level())
    return cmd_validate(args)


if __name__ == "__main__":
    exit(main())
