"""Data models for round-trip validation results.

The ``to_dict`` / ``from_dict`` pairs define the persisted report format.
A report written by a validation run is the only input of a later analysis
run, so key names here must stay stable.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ReportFormatError(ValueError):
    """Raised when a persisted report does not have the expected shape."""


@dataclass(frozen=True)
class Position:
    """Location of a diagnostic in the re-imported text. Any field may be unknown."""

    line: int | None = None
    column: int | None = None
    offset: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"line": self.line, "column": self.column, "offset": self.offset}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "Position":
        data = data or {}
        return cls(line=data.get("line"), column=data.get("column"), offset=data.get("offset"))


@dataclass(frozen=True)
class DiagnosticItem:
    """One lexer, parser or semantic issue found while re-importing."""

    code: int | None = None
    message: str | None = None
    severity: int | None = None
    start: Position = field(default_factory=Position)
    end: Position | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity,
            "start": self.start.to_dict(),
            "end": self.end.to_dict() if self.end is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DiagnosticItem":
        end = data.get("end")
        return cls(
            code=data.get("code"),
            message=data.get("message"),
            severity=data.get("severity"),
            start=Position.from_dict(data.get("start")),
            end=Position.from_dict(end) if end is not None else None,
        )


# Category keys in persisted diagnostics, in display order
CATEGORY_KEYS: tuple[str, ...] = ("lexerErrors", "parserErrors", "semanticErrors")


@dataclass(frozen=True)
class Diagnostics:
    """Normalized failure record for one file."""

    message: str
    type: str | int | None = None
    lexer_errors: tuple[DiagnosticItem, ...] = ()
    parser_errors: tuple[DiagnosticItem, ...] = ()
    semantic_errors: tuple[DiagnosticItem, ...] = ()

    @property
    def error_count(self) -> int:
        """Total number of items across the three categories."""
        return len(self.lexer_errors) + len(self.parser_errors) + len(self.semantic_errors)

    def categories(self) -> dict[str, tuple[DiagnosticItem, ...]]:
        """Return the item sequences keyed by their persisted category name."""
        return {
            "lexerErrors": self.lexer_errors,
            "parserErrors": self.parser_errors,
            "semanticErrors": self.semantic_errors,
        }

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"message": self.message, "type": self.type}
        for key, items in self.categories().items():
            data[key] = [item.to_dict() for item in items]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Diagnostics":
        def items(key: str) -> tuple[DiagnosticItem, ...]:
            return tuple(DiagnosticItem.from_dict(i) for i in data.get(key) or [])

        return cls(
            message=data.get("message") or "",
            type=data.get("type"),
            lexer_errors=items("lexerErrors"),
            parser_errors=items("parserErrors"),
            semantic_errors=items("semanticErrors"),
        )


class FileStatus(Enum):
    """Terminal outcome of validating one file."""

    PASSED = "passed"  # Round trip succeeded
    FAILED = "failed"  # Re-import raised diagnostics
    ERROR = "error"  # Unreadable input or infrastructure problem


@dataclass(frozen=True)
class FileResult:
    """Outcome for one input file. Built once, never mutated."""

    input: str
    atex: str
    status: FileStatus
    diagnostics: Diagnostics | None = None
    message: str | None = None

    @property
    def error_count(self) -> int:
        return self.diagnostics.error_count if self.diagnostics is not None else 0

    @classmethod
    def passed(cls, input_name: str, atex: str) -> "FileResult":
        return cls(input=input_name, atex=atex, status=FileStatus.PASSED)

    @classmethod
    def failed(cls, input_name: str, atex: str, diagnostics: Diagnostics) -> "FileResult":
        return cls(input=input_name, atex=atex, status=FileStatus.FAILED, diagnostics=diagnostics)

    @classmethod
    def errored(cls, input_name: str, atex: str, message: str) -> "FileResult":
        return cls(input=input_name, atex=atex, status=FileStatus.ERROR, message=message)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "input": self.input,
            "atex": self.atex,
            "status": self.status.value,
        }
        if self.status == FileStatus.FAILED:
            data["errorCount"] = self.error_count
            data["diagnostics"] = self.diagnostics.to_dict() if self.diagnostics else None
        elif self.status == FileStatus.ERROR:
            data["message"] = self.message
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FileResult":
        # Early reports keyed failing entries by "gp5"
        input_name = data.get("input", data.get("gp5"))
        if input_name is None or "status" not in data:
            raise ReportFormatError(f"Result entry without input name or status: {data!r}")

        try:
            status = FileStatus(data["status"])
        except ValueError as e:
            raise ReportFormatError(f"Unknown status {data['status']!r} for {input_name}") from e

        diagnostics = data.get("diagnostics")
        return cls(
            input=input_name,
            atex=data.get("atex") or "",
            status=status,
            diagnostics=Diagnostics.from_dict(diagnostics) if diagnostics else None,
            message=data.get("message"),
        )


@dataclass(frozen=True)
class BatchReport:
    """Outcome of one validation run over a directory of scores."""

    generated_at: str
    input_dir: str
    out_dir: str
    total_files: int
    results: tuple[FileResult, ...] = ()

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.status == FileStatus.PASSED)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status == FileStatus.FAILED)

    @property
    def errored(self) -> int:
        return sum(1 for r in self.results if r.status == FileStatus.ERROR)

    def failed_results(self) -> list[FileResult]:
        return [r for r in self.results if r.status == FileStatus.FAILED]

    def to_dict(self) -> dict[str, Any]:
        return {
            "generatedAt": self.generated_at,
            "inputDir": self.input_dir,
            "outDir": self.out_dir,
            "totalFiles": self.total_files,
            "passed": self.passed,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BatchReport":
        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            raise ReportFormatError("Report must be an object with a 'results' list")

        try:
            results = tuple(FileResult.from_dict(r) for r in data["results"])
            total = data.get("totalFiles")
            return cls(
                generated_at=data.get("generatedAt") or "",
                input_dir=data.get("inputDir") or "",
                out_dir=data.get("outDir") or "",
                total_files=int(total) if total is not None else len(results),
                results=results,
            )
        except ReportFormatError:
            raise
        except (AttributeError, TypeError, ValueError) as e:
            raise ReportFormatError(f"Malformed report: {type(e).__name__}: {e}") from e
