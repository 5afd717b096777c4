"""Logging utilities with rich output for the round-trip tools.

Both command line entry points (``roundtrip.cli`` and ``error_analysis.cli``)
share one rich console so that per-file progress lines and log records
interleave cleanly.

Usage:
    from common.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Validating 80 files...")
    logger.warning("Could not save export text")
"""

import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

# Global console instance for consistent output
console = Console()


def _rich_handler(show_time: bool = False, show_path: bool = False) -> RichHandler:
    handler = RichHandler(
        console=console,
        show_time=show_time,
        show_path=show_path,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        markup=True,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return handler


def get_logger(
    name: str,
    level: str | None = None,
    show_time: bool = False,
    show_path: bool = False,
) -> logging.Logger:
    """Get a configured logger with rich output.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If None, uses environment variable LOG_LEVEL or defaults to INFO.
        show_time: Show timestamp in log output
        show_path: Show file path in log output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding multiple handlers if logger already configured
    if logger.handlers:
        return logger

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO").upper()

    logger.setLevel(level.upper())
    logger.addHandler(_rich_handler(show_time=show_time, show_path=show_path))

    # Records still reach the root logger, so pytest's caplog sees them
    logger.propagate = True

    return logger


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure the root logger once at a CLI entry point.

    Module loggers created through get_logger() keep their own level, so the
    level is applied to every already-registered logger as well. This is what
    makes ``--verbose`` switch the whole run to DEBUG.

    Args:
        level: Logging level for the run; LOG_LEVEL overrides it
        log_file: Optional file path to also log to a file
    """
    level = os.getenv("LOG_LEVEL", level).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Drop file handlers from an earlier call, keep foreign handlers (pytest caplog)
    for handler in list(root_logger.handlers):
        if isinstance(handler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    # Module loggers own the console handler; the root only writes the file
    for existing in logging.Logger.manager.loggerDict.values():
        if isinstance(existing, logging.Logger) and existing.handlers:
            existing.setLevel(level)


def progress(message: str) -> None:
    """Print a plain progress line. Square brackets are printed literally.

    Example:
        >>> progress("[1/80] Song.gp5 ... OK")
        [1/80] Song.gp5 ... OK
    """
    console.print(escape(message), highlight=False)


def success(message: str) -> None:
    """Print a success message with a green checkmark."""
    console.print(f"[green]✓[/green] {escape(message)}")


def warning(message: str) -> None:
    """Print a warning message with a yellow warning icon."""
    console.print(f"[yellow]⚠[/yellow] {escape(message)}")


def error(message: str) -> None:
    """Print an error message with a red X icon to stderr."""
    Console(file=sys.stderr).print(f"[red]✗[/red] {escape(message)}")
