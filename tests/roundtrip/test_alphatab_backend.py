"""Tests for the alphaTab Node.js bridge backend."""

import json
import subprocess
from unittest.mock import patch

import pytest

from roundtrip.backends.alphatab import BRIDGE_SCRIPT, AlphaTabBackend
from roundtrip.backends.base import (
    BackendError,
    BackendNotFoundError,
    ScoreLoadError,
    TextImportError,
)
from roundtrip.diagnostics import extract_diagnostics


def completed(returncode, payload, stderr=b""):
    stdout = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def backend():
    return AlphaTabBackend(node_binary="node", module="@coderline/alphatab")


def test_bridge_script_is_bundled():
    assert BRIDGE_SCRIPT.exists()


@patch("subprocess.run")
def test_check_available(mock_run, backend):
    mock_run.return_value = completed(0, {"name": "@coderline/alphatab", "version": "1.8.0"})

    assert backend.check_available() == "@coderline/alphatab 1.8.0"
    cmd = mock_run.call_args.args[0]
    assert cmd == ["node", str(BRIDGE_SCRIPT), "ping"]
    assert mock_run.call_args.kwargs["env"]["ALPHATAB_MODULE"] == "@coderline/alphatab"


@patch("subprocess.run", side_effect=FileNotFoundError("node"))
def test_missing_node(mock_run, backend):
    with pytest.raises(BackendNotFoundError):
        backend.check_available()


@patch("subprocess.run")
def test_missing_library(mock_run, backend):
    mock_run.return_value = completed(2, {"error": {"message": "Missing dependency: @coderline/alphatab"}})

    with pytest.raises(BackendNotFoundError, match="Missing dependency"):
        backend.check_available()


@patch("subprocess.run")
def test_load_and_export(mock_run, backend):
    mock_run.side_effect = [
        completed(0, {"title": "Hells Bells", "artist": "AC/DC", "trackCount": 4}),
        completed(0, {"text": "\\title \"Hells Bells\" ."}),
    ]

    score = backend.load_score(b"GP5DATA")
    text = backend.export_text(score)

    assert score.title == "Hells Bells"
    assert score.track_count == 4
    assert text == "\\title \"Hells Bells\" ."
    assert mock_run.call_args_list[1].kwargs["input"] == b"GP5DATA"


@patch("subprocess.run")
def test_load_failure(mock_run, backend):
    mock_run.return_value = completed(4, {"error": {"message": "Unsupported format"}})

    with pytest.raises(ScoreLoadError, match="Unsupported format"):
        backend.load_score(b"junk")


@patch("subprocess.run")
def test_import_diagnostics(mock_run, backend):
    error = {
        "message": "Error while parsing alphaTex",
        "type": None,
        "name": "AlphaTexErrorWithDiagnostics",
        "lexerDiagnostics": None,
        "parserDiagnostics": None,
        "semanticDiagnostics": {
            "items": [{"code": 209, "message": "Unknown tuning", "start": {"line": 3, "col": 5, "offset": 40}}]
        },
    }
    mock_run.return_value = completed(3, {"error": error})

    with pytest.raises(TextImportError) as exc_info:
        backend.import_text("\\tuning X")

    diagnostics = extract_diagnostics(exc_info.value)
    assert diagnostics.type == "AlphaTexErrorWithDiagnostics"
    assert diagnostics.semantic_errors[0].code == 209
    assert diagnostics.semantic_errors[0].start.column == 5
    assert mock_run.call_args.kwargs["input"] == "\\tuning X".encode("utf-8")


@patch("subprocess.run")
def test_garbage_output(mock_run, backend):
    mock_run.return_value = completed(139, b"Segmentation fault", stderr=b"core dumped")

    with pytest.raises(BackendError, match="invalid output"):
        backend.import_text("x")


@patch("subprocess.run")
def test_unknown_exit_code(mock_run, backend):
    mock_run.return_value = completed(1, {"error": {"message": "TypeError: x is undefined"}})

    with pytest.raises(BackendError, match="x is undefined"):
        backend.load_score(b"x")
