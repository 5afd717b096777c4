"""Shared constants for the score round-trip tools.

For environment-based configuration (input/output directories, Node.js
binary, ...), use the env module:
    from common.env import env
    raw_dir = env.raw_dir()
"""

from pathlib import Path

# Data directories
DATA_DIR = Path("data")
RAW_DIR = DATA_DIR / "raw"
ERROR_DIR = DATA_DIR / "error"

# Files written by a validation run (inside the output directory)
REPORT_FILENAME = "report.json"
LOG_FILENAME = "log.txt"
FAILED_INPUT_DIRNAME = "failed_gp5"
FAILED_EXPORT_DIRNAME = "fail_atex"

# Written next to the analyzed report
ANALYSIS_FILENAME = "error-analysis.txt"

# Suffix of the exported text artifact
EXPORT_SUFFIX = ".atex"

# Score file suffixes picked up from the input directory
DEFAULT_SCORE_EXTENSIONS: tuple[str, ...] = (".gp5",)
