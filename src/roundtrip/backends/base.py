"""Abstract score backend and the exceptions it raises."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Score:
    """A score loaded by a backend.

    Attributes:
        data: Raw bytes the score was loaded from
        title: Score title, if the file carries one
        artist: Score artist, if the file carries one
        track_count: Number of tracks
    """

    data: bytes
    title: str | None = None
    artist: str | None = None
    track_count: int = 0


class ScoreBackend(ABC):
    """Base class for the external load / export / re-import capability.

    Implementations wrap a concrete score library. The validator only sees
    this interface, so tests can substitute an in-memory backend.
    """

    @abstractmethod
    def check_available(self) -> str:
        """Verify that the backend can run at all.

        Returns:
            Human-readable description of the backend (name and version)

        Raises:
            BackendNotFoundError: If the runtime or library is missing
        """
        pass

    @abstractmethod
    def load_score(self, data: bytes) -> Score:
        """Parse score file bytes.

        Raises:
            ScoreLoadError: If the bytes are not a readable score
            BackendError: If the backend itself failed
        """
        pass

    @abstractmethod
    def export_text(self, score: Score) -> str:
        """Export a loaded score to its text representation.

        Raises:
            ScoreLoadError: If the score cannot be exported
            BackendError: If the backend itself failed
        """
        pass

    @abstractmethod
    def import_text(self, text: str) -> Score:
        """Re-parse exported text.

        Raises:
            TextImportError: If the text does not import cleanly
            BackendError: If the backend itself failed
        """
        pass


class RoundTripError(Exception):
    """Base exception for round-trip validation errors."""

    pass


class BackendError(RoundTripError):
    """The backend could not perform an operation (crash, bad output, ...)."""

    pass


class BackendNotFoundError(BackendError):
    """The backend runtime or library is not installed."""

    pass


class ScoreLoadError(RoundTripError):
    """Input bytes could not be loaded or exported."""

    pass


class TextImportError(RoundTripError):
    """Re-importing exported text failed with diagnostics.

    The diagnostic collections are kept exactly as the backend reported
    them; ``roundtrip.diagnostics`` turns them into the normalized form.
    """

    def __init__(
        self,
        message: str,
        type: Any = None,
        lexer_diagnostics: Any = None,
        parser_diagnostics: Any = None,
        semantic_diagnostics: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.type = type
        self.lexer_diagnostics = lexer_diagnostics
        self.parser_diagnostics = parser_diagnostics
        self.semantic_diagnostics = semantic_diagnostics

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TextImportError":
        """Build from the JSON error object emitted by a bridge process."""
        return cls(
            message=payload.get("message") or "Import failed",
            type=payload.get("type") if payload.get("type") is not None else payload.get("name"),
            lexer_diagnostics=payload.get("lexerDiagnostics"),
            parser_diagnostics=payload.get("parserDiagnostics"),
            semantic_diagnostics=payload.get("semanticDiagnostics"),
        )
