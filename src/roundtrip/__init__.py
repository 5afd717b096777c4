"""Round-trip validation of score files through export and re-import."""

from .diagnostics import extract_diagnostics
from .models import (
    BatchReport,
    DiagnosticItem,
    Diagnostics,
    FileResult,
    FileStatus,
    Position,
    ReportFormatError,
)
from .report_writer import read_report, write_report
from .runner import ArtifactStore, BatchRunner
from .validator import RoundTripValidator, ValidationOutcome

__all__ = [
    "ArtifactStore",
    "BatchReport",
    "BatchRunner",
    "DiagnosticItem",
    "Diagnostics",
    "FileResult",
    "FileStatus",
    "Position",
    "ReportFormatError",
    "RoundTripValidator",
    "ValidationOutcome",
    "extract_diagnostics",
    "read_report",
    "write_report",
]
