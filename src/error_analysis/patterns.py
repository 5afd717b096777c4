"""Ordered message-pattern rules for bucketing diagnostic messages.

Rules are evaluated top to bottom and the first match wins, so more specific
rules must come first ("unexpected" before "expected"). The default set
targets alphaTex's English messages; a JSON rule file can replace it:

    [
        {"label": "Unexpected token", "keywords": ["unexpected"]},
        {"label": "Bad duration", "regex": "duration \\\\d+"}
    ]
"""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path

OTHER_LABEL = "Other"


@dataclass(frozen=True)
class PatternRule:
    """A named bucket matched by keywords (substring) or a regular expression.

    Matching is case-insensitive. A rule matches if any keyword occurs in the
    message or the regex is found in it.
    """

    label: str
    keywords: tuple[str, ...] = ()
    regex: re.Pattern | None = field(default=None, compare=False)

    def matches(self, message: str) -> bool:
        lowered = message.lower()
        if any(keyword in lowered for keyword in self.keywords):
            return True
        return self.regex is not None and self.regex.search(message) is not None

    @classmethod
    def create(cls, label: str, keywords: list[str] | None = None, regex: str | None = None) -> "PatternRule":
        return cls(
            label=label,
            keywords=tuple(k.lower() for k in keywords or []),
            regex=re.compile(regex, re.IGNORECASE) if regex else None,
        )


DEFAULT_PATTERN_RULES: tuple[PatternRule, ...] = (
    PatternRule.create("Unexpected token", ["unexpected"]),
    PatternRule.create("Expected token missing", ["expected", "missing"]),
    PatternRule.create("Unknown identifier", ["unknown", "unrecognized", "not found"]),
    PatternRule.create("Unsupported feature", ["not supported", "unsupported"]),
    PatternRule.create("Invalid value", ["invalid", "must be", "out of range"]),
    PatternRule.create("Duplicate definition", ["duplicate", "already"]),
    PatternRule.create("Track/staff structure", ["track", "staff", "voice"]),
    PatternRule.create("Bar/beat structure", ["bar", "beat", "duration"]),
)


def classify_message(message: str | None, rules: tuple[PatternRule, ...] = DEFAULT_PATTERN_RULES) -> str:
    """Return the label of the first rule matching the message, or 'Other'."""
    if message:
        for rule in rules:
            if rule.matches(message):
                return rule.label
    return OTHER_LABEL


def load_pattern_rules(file_path: Path) -> tuple[PatternRule, ...]:
    """Load pattern rules from a JSON file.

    Args:
        file_path: Path to a JSON list of {"label", "keywords"?, "regex"?} objects

    Returns:
        Rules in file order

    Raises:
        ValueError: If the file is not a list of valid rule objects
    """
    data = json.loads(file_path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Pattern file must contain a JSON list: {file_path}")

    rules = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict) or not entry.get("label"):
            raise ValueError(f"Pattern rule #{index} needs a 'label': {entry!r}")
        if not entry.get("keywords") and not entry.get("regex"):
            raise ValueError(f"Pattern rule '{entry['label']}' needs 'keywords' or 'regex'")
        try:
            rules.append(PatternRule.create(entry["label"], entry.get("keywords"), entry.get("regex")))
        except re.error as e:
            raise ValueError(f"Invalid regex in pattern rule '{entry['label']}': {e}") from e

    return tuple(rules)
