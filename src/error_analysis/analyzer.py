"""Compute error statistics from a persisted batch report."""

from collections import Counter, defaultdict
from decimal import ROUND_HALF_UP, Decimal

from roundtrip.models import BatchReport, DiagnosticItem

from .models import (
    AnalysisSummary,
    CategoryCount,
    ErrorCodeStat,
    FileErrorStat,
    Overview,
    PatternBucket,
)
from .patterns import DEFAULT_PATTERN_RULES, OTHER_LABEL, PatternRule, classify_message

# (persisted key, display label)
CATEGORIES: tuple[tuple[str, str], ...] = (
    ("lexerErrors", "Lexer Errors"),
    ("parserErrors", "Parser Errors"),
    ("semanticErrors", "Semantic Errors"),
)

SAMPLE_MESSAGE_WIDTH = 60


def percentage(count: int, total: int) -> float:
    """Return count/total*100 rounded half-up to one decimal; 0.0 when total is 0.

    Example:
        >>> percentage(53, 80)
        66.3
    """
    if total <= 0:
        return 0.0
    value = Decimal(count) * 100 / Decimal(total)
    return float(value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def truncate(message: str | None, width: int = SAMPLE_MESSAGE_WIDTH) -> str:
    """Collapse whitespace and cut a message to ``width`` characters."""
    text = " ".join((message or "").split())
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


def _code_sort_key(stat: ErrorCodeStat) -> tuple:
    # Most frequent first, then ascending code; unknown codes last among ties
    return (-stat.count, stat.code is None, stat.code if stat.code is not None else 0)


class ErrorAnalyzer:
    """Derive an AnalysisSummary from a BatchReport. The report is never modified."""

    def __init__(
        self,
        pattern_rules: tuple[PatternRule, ...] = DEFAULT_PATTERN_RULES,
        top_codes: int = 15,
        top_files: int = 10,
    ):
        """Initialize the analyzer.

        Args:
            pattern_rules: Ordered message-pattern rules
            top_codes: Number of error codes to keep in the ranking
            top_files: Number of files to keep in the ranking
        """
        self.pattern_rules = pattern_rules
        self.top_codes = top_codes
        self.top_files = top_files

    def analyze(self, report: BatchReport) -> AnalysisSummary:
        failed = report.failed_results()

        category_counts = {key: 0 for key, _ in CATEGORIES}
        all_items: list[tuple[str, DiagnosticItem]] = []
        for result in failed:
            if result.diagnostics is None:
                continue
            for key, items in result.diagnostics.categories().items():
                category_counts[key] += len(items)
                all_items.extend((result.input, item) for item in items)

        total_diagnostics = sum(category_counts.values())
        code_stats = self._code_stats(all_items)

        return AnalysisSummary(
            generated_at=report.generated_at,
            input_dir=report.input_dir,
            overview=self._overview(report),
            categories=tuple(
                CategoryCount(label, category_counts[key], percentage(category_counts[key], total_diagnostics))
                for key, label in CATEGORIES
            ),
            total_diagnostics=total_diagnostics,
            top_codes=tuple(code_stats[: self.top_codes]),
            distinct_codes=len(code_stats),
            patterns=self._pattern_buckets(item for _, item in all_items),
            top_files=self._file_stats(report),
        )

    def _overview(self, report: BatchReport) -> Overview:
        return Overview(
            total_files=report.total_files,
            passed=report.passed,
            failed=report.failed,
            errored=report.errored,
            passed_pct=percentage(report.passed, report.total_files),
            failed_pct=percentage(report.failed, report.total_files),
        )

    def _code_stats(self, items: list[tuple[str, DiagnosticItem]]) -> list[ErrorCodeStat]:
        counts: Counter = Counter()
        files: dict[int | None, set[str]] = defaultdict(set)
        samples: dict[int | None, str] = {}

        for input_name, item in items:
            counts[item.code] += 1
            files[item.code].add(input_name)
            if item.code not in samples and item.message:
                samples[item.code] = truncate(item.message)

        stats = [
            ErrorCodeStat(code=code, count=count, file_count=len(files[code]), sample_message=samples.get(code, ""))
            for code, count in counts.items()
        ]
        return sorted(stats, key=_code_sort_key)

    def _pattern_buckets(self, items) -> tuple[PatternBucket, ...]:
        counts: Counter = Counter(classify_message(item.message, self.pattern_rules) for item in items)

        # Ties keep rule order; "Other" sorts after every rule
        order = {rule.label: index for index, rule in enumerate(self.pattern_rules)}
        order.setdefault(OTHER_LABEL, len(order))
        ranked = sorted(counts.items(), key=lambda kv: (-kv[1], order.get(kv[0], len(order)), kv[0]))
        return tuple(PatternBucket(label, count) for label, count in ranked)

    def _file_stats(self, report: BatchReport) -> tuple[FileErrorStat, ...]:
        stats = [
            FileErrorStat(
                input=result.input,
                error_count=result.error_count,
                lexer=len(result.diagnostics.lexer_errors) if result.diagnostics else 0,
                parser=len(result.diagnostics.parser_errors) if result.diagnostics else 0,
                semantic=len(result.diagnostics.semantic_errors) if result.diagnostics else 0,
            )
            for result in report.failed_results()
        ]
        stats.sort(key=lambda s: (-s.error_count, s.input))
        return tuple(stats[: self.top_files])
