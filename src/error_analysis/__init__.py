"""Error statistics over round-trip validation reports."""

from .analyzer import ErrorAnalyzer
from .models import AnalysisSummary
from .patterns import DEFAULT_PATTERN_RULES, PatternRule, classify_message, load_pattern_rules
from .reporters import AnalysisReporter

__all__ = [
    "AnalysisReporter",
    "AnalysisSummary",
    "DEFAULT_PATTERN_RULES",
    "ErrorAnalyzer",
    "PatternRule",
    "classify_message",
    "load_pattern_rules",
]
