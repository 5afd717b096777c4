"""Render analysis summaries as text."""

from .models import AnalysisSummary

RULE_WIDTH = 72


def _heading(title: str) -> list[str]:
    return ["", title, "-" * RULE_WIDTH]


class AnalysisReporter:
    """Format an AnalysisSummary as a fixed-layout text report.

    The output only depends on the summary, so the same report always
    renders to the same text.
    """

    def render_text(self, summary: AnalysisSummary) -> str:
        lines = ["=" * RULE_WIDTH, "ALPHATEX ROUND-TRIP ERROR ANALYSIS", "=" * RULE_WIDTH]
        if summary.generated_at:
            lines.append(f"Report generated: {summary.generated_at}")
        if summary.input_dir:
            lines.append(f"Input directory: {summary.input_dir}")

        overview = summary.overview
        lines += _heading("OVERVIEW")
        lines.append(f"Total files: {overview.total_files}")
        lines.append(f"Passed: {overview.passed} ({overview.passed_pct:.1f}%)")
        lines.append(f"Failed: {overview.failed} ({overview.failed_pct:.1f}%)")
        if overview.errored:
            lines.append(f"Errors: {overview.errored}")

        lines += _heading("ERROR TYPE DISTRIBUTION")
        for category in summary.categories:
            lines.append(f"{category.label}: {category.count} ({category.percentage:.1f}%)")
        lines.append(f"Total diagnostics: {summary.total_diagnostics}")

        lines += _heading(f"TOP ERROR CODES ({len(summary.top_codes)} of {summary.distinct_codes})")
        if summary.top_codes:
            lines.append(f"{'Code':>6}  {'Count':>6}  {'Files':>5}  Sample message")
            for stat in summary.top_codes:
                code = str(stat.code) if stat.code is not None else "-"
                lines.append(f"{code:>6}  {stat.count:>6}  {stat.file_count:>5}  {stat.sample_message}")
        else:
            lines.append("No diagnostics recorded.")

        lines += _heading("MESSAGE PATTERNS")
        if summary.patterns:
            width = max(len(bucket.label) for bucket in summary.patterns)
            for bucket in summary.patterns:
                lines.append(f"{bucket.label:<{width}}  {bucket.count:>6}")
        else:
            lines.append("No diagnostics recorded.")

        lines += _heading(f"FILES WITH MOST ERRORS (top {len(summary.top_files)})")
        if summary.top_files:
            for rank, stat in enumerate(summary.top_files, start=1):
                lines.append(
                    f"{rank:>3}. {stat.input}: {stat.error_count} errors "
                    f"(lexer {stat.lexer}, parser {stat.parser}, semantic {stat.semantic})"
                )
        else:
            lines.append("No failing files.")

        return "\n".join(lines) + "\n"
