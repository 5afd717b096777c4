"""Data models for error analysis summaries.

All of these are derived from a persisted BatchReport and recomputed on
every analysis run.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Overview:
    """Pass/fail counts of the whole run."""

    total_files: int
    passed: int
    failed: int
    errored: int
    passed_pct: float
    failed_pct: float


@dataclass(frozen=True)
class CategoryCount:
    """Number of diagnostics in one category (lexer, parser, semantic)."""

    label: str
    count: int
    percentage: float


@dataclass(frozen=True)
class ErrorCodeStat:
    """Occurrences of one diagnostic code."""

    code: int | None
    count: int
    file_count: int
    sample_message: str


@dataclass(frozen=True)
class PatternBucket:
    """Number of diagnostic messages classified under one pattern label."""

    label: str
    count: int


@dataclass(frozen=True)
class FileErrorStat:
    """Diagnostic counts for one failing file."""

    input: str
    error_count: int
    lexer: int
    parser: int
    semantic: int


@dataclass(frozen=True)
class AnalysisSummary:
    """Everything the text report shows."""

    generated_at: str
    input_dir: str
    overview: Overview
    categories: tuple[CategoryCount, ...]
    total_diagnostics: int
    top_codes: tuple[ErrorCodeStat, ...]
    distinct_codes: int
    patterns: tuple[PatternBucket, ...]
    top_files: tuple[FileErrorStat, ...]
