"""Environment configuration interface for the round-trip tools.

This module provides a clean interface for accessing environment variables,
centralizing all environment variable access in one place.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from common.constants import DEFAULT_SCORE_EXTENSIONS, ERROR_DIR, RAW_DIR

# Load environment variables from .env file if it exists
load_dotenv()


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def log_level() -> str:
        """Get the logging level.

        Returns:
            Upper-cased level name, defaults to 'INFO'
        """
        return os.getenv("LOG_LEVEL", "INFO").upper()

    @staticmethod
    def raw_dir() -> Path:
        """Get the directory holding the score files to validate.

        Returns:
            Input directory, defaults to data/raw
        """
        return Path(os.getenv("SCORE_RAW_DIR", str(RAW_DIR)))

    @staticmethod
    def error_dir() -> Path:
        """Get the directory receiving the report and failing artifacts.

        Returns:
            Output directory, defaults to data/error
        """
        return Path(os.getenv("SCORE_ERROR_DIR", str(ERROR_DIR)))

    @staticmethod
    def score_extensions() -> tuple[str, ...]:
        """Get the score file suffixes to validate.

        SCORE_EXTENSIONS is a comma-separated list; a missing leading dot is
        added and suffixes are lower-cased.

        Returns:
            Tuple of suffixes, defaults to ('.gp5',)
        """
        raw = os.getenv("SCORE_EXTENSIONS", "")
        extensions = tuple(normalize_extension(part) for part in raw.split(",") if part.strip())
        return extensions or DEFAULT_SCORE_EXTENSIONS

    @staticmethod
    def node_binary() -> str:
        """Get the Node.js executable used to run the alphaTab bridge.

        Returns:
            Executable name or path, defaults to 'node'
        """
        return os.getenv("NODE_BINARY", "node")

    @staticmethod
    def alphatab_module() -> str:
        """Get the module specifier of the alphaTab library.

        Returns:
            Module specifier, defaults to '@coderline/alphatab'
        """
        return os.getenv("ALPHATAB_MODULE", "@coderline/alphatab")


def normalize_extension(extension: str) -> str:
    """Return a lower-cased suffix with a leading dot ('GP5' -> '.gp5')."""
    extension = extension.strip().lower()
    if not extension.startswith("."):
        extension = "." + extension
    return extension


# Singleton instance for convenient access
env = Environment()
