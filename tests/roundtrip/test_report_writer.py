"""Tests for report persistence."""

import json

import pytest

from roundtrip.models import FileResult, ReportFormatError
from roundtrip.report_writer import format_log, read_report, write_report


def test_log_lines(make_failed, make_report):
    report = make_report(
        [
            FileResult.passed("a.gp5", "a.atex"),
            make_failed("b.gp5", semantic=[(209, "x"), (209, "y")]),
            FileResult.errored("c.gp5", "c.atex", "Unsupported format"),
        ]
    )

    assert format_log(report).split("\n") == [
        "a.gp5: PASSED",
        "b.gp5: FAILED (2 errors)",
        "c.gp5: ERROR (Unsupported format)",
    ]


def test_write_and_read_report(make_failed, make_report, tmp_path):
    report = make_report([FileResult.passed("a.gp5", "a.atex"), make_failed("b.gp5", lexer=[(1, "x")])])

    report_path, log_path = write_report(report, tmp_path / "out")

    assert report_path.name == "report.json"
    assert log_path.read_text() == "a.gp5: PASSED\nb.gp5: FAILED (1 errors)"
    data = json.loads(report_path.read_text())
    assert data["passed"] == 1
    assert data["failed"] == 1
    assert data["results"][1]["diagnostics"]["lexerErrors"][0]["code"] == 1
    assert read_report(report_path) == report


def test_read_missing_report(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_report(tmp_path / "nope.json")


def test_read_invalid_json(tmp_path):
    path = tmp_path / "report.json"
    path.write_text("{not json")
    with pytest.raises(ReportFormatError):
        read_report(path)
