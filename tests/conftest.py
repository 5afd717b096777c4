"""Shared pytest fixtures for the round-trip tests."""

import pytest

from roundtrip.backends.base import (
    BackendError,
    BackendNotFoundError,
    Score,
    ScoreBackend,
    ScoreLoadError,
    TextImportError,
)
from roundtrip.models import (
    BatchReport,
    DiagnosticItem,
    Diagnostics,
    FileResult,
    Position,
)

CATEGORY_FIELDS = {
    "lexer": "lexer_diagnostics",
    "parser": "parser_diagnostics",
    "semantic": "semantic_diagnostics",
}


class FakeBackend(ScoreBackend):
    """In-memory backend scripted by the score bytes.

    - b"corrupt..."                  load fails (ScoreLoadError)
    - b"crash..."                    re-import hits a backend failure
    - b"fail:<category>:<c1>,<c2>"   re-import raises one item per code
    - anything else                  round trip passes
    """

    def __init__(self, available: bool = True):
        self.available = available
        self.imported: list[str] = []

    def check_available(self) -> str:
        if not self.available:
            raise BackendNotFoundError("Missing dependency: fake")
        return "fake 1.0"

    def load_score(self, data: bytes) -> Score:
        if data.startswith(b"corrupt"):
            raise ScoreLoadError("Unsupported format")
        return Score(data=data, title="Fake")

    def export_text(self, score: Score) -> str:
        return score.data.decode("utf-8")

    def import_text(self, text: str) -> Score:
        self.imported.append(text)
        if text.startswith("crash"):
            raise BackendError("bridge exited with 139")
        if text.startswith("fail:"):
            _, category, codes = text.split(":", 2)
            items = [
                {"code": int(code), "message": f"Error {code}", "start": {"line": i + 1, "col": 1}}
                for i, code in enumerate(codes.split(","))
            ]
            raise TextImportError(
                "Error while parsing alphaTex",
                **{CATEGORY_FIELDS[category]: {"items": items}},
            )
        return Score(data=text.encode("utf-8"))


@pytest.fixture
def fake_backend():
    """A scripted in-memory score backend."""
    return FakeBackend()


@pytest.fixture
def unavailable_backend():
    """A backend whose runtime is missing."""
    return FakeBackend(available=False)


@pytest.fixture
def score_dir(tmp_path):
    """Input directory with two passing, two failing and one corrupt score."""
    raw = tmp_path / "raw"
    raw.mkdir()
    (raw / "a_pass.gp5").write_bytes(b"ok")
    (raw / "b_fail.gp5").write_bytes(b"fail:semantic:209,209,301")
    (raw / "c_corrupt.gp5").write_bytes(b"corrupt")
    (raw / "d_fail.GP5").write_bytes(b"fail:parser:12")
    (raw / "e_pass.gp5").write_bytes(b"ok again")
    (raw / "notes.txt").write_text("not a score")
    return raw


@pytest.fixture
def make_failed():
    """Factory for failed FileResults with given codes/messages per category."""

    def _make(name, lexer=(), parser=(), semantic=()):
        def items(entries):
            return tuple(
                DiagnosticItem(code=code, message=message, start=Position(line=1))
                for code, message in entries
            )

        diagnostics = Diagnostics(
            message="Error while parsing alphaTex",
            lexer_errors=items(lexer),
            parser_errors=items(parser),
            semantic_errors=items(semantic),
        )
        return FileResult.failed(name, name.rsplit(".", 1)[0] + ".atex", diagnostics)

    return _make


@pytest.fixture
def make_report():
    """Factory for BatchReports from a list of FileResults."""

    def _make(results, total_files=None):
        return BatchReport(
            generated_at="2025-01-31T12:00:00.000Z",
            input_dir="/data/raw",
            out_dir="/data/error",
            total_files=len(results) if total_files is None else total_files,
            results=tuple(results),
        )

    return _make
