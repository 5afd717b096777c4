"""Score backends used by the round-trip validator."""

from .alphatab import AlphaTabBackend
from .base import (
    BackendError,
    BackendNotFoundError,
    RoundTripError,
    Score,
    ScoreBackend,
    ScoreLoadError,
    TextImportError,
)

__all__ = [
    "AlphaTabBackend",
    "BackendError",
    "BackendNotFoundError",
    "RoundTripError",
    "Score",
    "ScoreBackend",
    "ScoreLoadError",
    "TextImportError",
]
