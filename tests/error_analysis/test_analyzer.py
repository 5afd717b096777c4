"""Tests for error statistics."""

import pytest

from error_analysis.analyzer import ErrorAnalyzer, percentage, truncate
from error_analysis.patterns import PatternRule
from roundtrip.models import FileResult


@pytest.fixture
def corpus_report(make_failed, make_report):
    """80 files: 53 pass, 27 fail with 365 semantic diagnostics in total."""
    results = [FileResult.passed(f"pass_{i:02d}.gp5", f"pass_{i:02d}.atex") for i in range(53)]
    for i in range(26):
        results.append(make_failed(f"fail_{i:02d}.gp5", semantic=[(209, "Unknown tuning value")] * 13))
    results.append(make_failed("fail_big.gp5", semantic=[(301, "Expected bar line")] * 27))
    return make_report(results)


class TestPercentage:
    def test_rounds_half_up(self):
        assert percentage(53, 80) == 66.3
        assert percentage(27, 80) == 33.8

    def test_zero_total(self):
        assert percentage(0, 0) == 0.0


def test_truncate():
    assert truncate("short") == "short"
    assert truncate("a" * 100) == "a" * 57 + "..."
    assert len(truncate("a" * 100)) == 60
    assert truncate("multi\n  line") == "multi line"
    assert truncate(None) == ""


def test_corpus_overview_and_distribution(corpus_report):
    summary = ErrorAnalyzer().analyze(corpus_report)

    assert summary.overview.total_files == 80
    assert (summary.overview.passed, summary.overview.passed_pct) == (53, 66.3)
    assert (summary.overview.failed, summary.overview.failed_pct) == (27, 33.8)
    assert summary.total_diagnostics == 365
    semantic = [c for c in summary.categories if c.label == "Semantic Errors"][0]
    assert (semantic.count, semantic.percentage) == (365, 100.0)
    assert [c.percentage for c in summary.categories if c.label != "Semantic Errors"] == [0.0, 0.0]


def test_top_codes(corpus_report):
    summary = ErrorAnalyzer().analyze(corpus_report)

    first, second = summary.top_codes
    assert (first.code, first.count, first.file_count) == (209, 338, 26)
    assert first.sample_message == "Unknown tuning value"
    assert (second.code, second.count, second.file_count) == (301, 27, 1)
    assert summary.distinct_codes == 2


def test_equal_counts_rank_lower_code_first(make_failed, make_report):
    report = make_report(
        [
            make_failed("a.gp5", parser=[(500, "x"), (500, "x")]),
            make_failed("b.gp5", lexer=[(20, "y")], semantic=[(20, "y")]),
        ]
    )

    codes = [stat.code for stat in ErrorAnalyzer().analyze(report).top_codes]

    assert codes == [20, 500]


def test_top_codes_limit(make_failed, make_report):
    report = make_report([make_failed("a.gp5", semantic=[(code, "m") for code in range(30)])])

    summary = ErrorAnalyzer(top_codes=5).analyze(report)

    assert [s.code for s in summary.top_codes] == [0, 1, 2, 3, 4]
    assert summary.distinct_codes == 30


def test_pattern_buckets(make_failed, make_report):
    report = make_report(
        [
            make_failed(
                "a.gp5",
                semantic=[
                    (1, "Unexpected token ')'"),
                    (2, "Expected ')' but found end"),
                    (3, "Unexpected character"),
                    (4, "Something odd"),
                ],
            )
        ]
    )

    patterns = ErrorAnalyzer().analyze(report).patterns

    assert [(p.label, p.count) for p in patterns] == [
        ("Unexpected token", 2),
        ("Expected token missing", 1),
        ("Other", 1),
    ]


def test_custom_pattern_rules(make_failed, make_report):
    rules = (PatternRule.create("Tuning", ["tuning"]),)
    report = make_report([make_failed("a.gp5", semantic=[(1, "Bad tuning"), (2, "Unexpected")])])

    patterns = ErrorAnalyzer(pattern_rules=rules).analyze(report).patterns

    assert [(p.label, p.count) for p in patterns] == [("Tuning", 1), ("Other", 1)]


def test_files_with_most_errors(make_failed, make_report):
    report = make_report(
        [
            make_failed("b.gp5", lexer=[(1, "x")], parser=[(2, "y")]),
            make_failed("a.gp5", semantic=[(3, "z"), (3, "z")]),
            make_failed("c.gp5", semantic=[(3, "z")] * 5),
            FileResult.passed("d.gp5", "d.atex"),
        ]
    )

    top = ErrorAnalyzer(top_files=2).analyze(report).top_files

    assert [(s.input, s.error_count) for s in top] == [("c.gp5", 5), ("a.gp5", 2)]
    assert (top[0].lexer, top[0].parser, top[0].semantic) == (0, 0, 5)


def test_ties_broken_by_file_name(make_failed, make_report):
    report = make_report([make_failed("z.gp5", lexer=[(1, "x")]), make_failed("m.gp5", parser=[(1, "x")])])

    assert [s.input for s in ErrorAnalyzer().analyze(report).top_files] == ["m.gp5", "z.gp5"]


def test_empty_report(make_report):
    summary = ErrorAnalyzer().analyze(make_report([]))

    assert summary.overview.passed_pct == 0.0
    assert summary.overview.failed_pct == 0.0
    assert summary.total_diagnostics == 0
    assert summary.top_codes == ()
    assert summary.patterns == ()
    assert summary.top_files == ()


def test_report_not_modified(corpus_report):
    before = corpus_report.to_dict()
    ErrorAnalyzer().analyze(corpus_report)
    assert corpus_report.to_dict() == before
