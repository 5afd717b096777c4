"""Round-trip validation of a single score: load, export, re-import."""

from dataclasses import dataclass
from pathlib import PurePath

from common.constants import EXPORT_SUFFIX
from common.logger import get_logger

from .backends.base import BackendError, ScoreBackend
from .diagnostics import extract_diagnostics
from .models import FileResult

logger = get_logger(__name__)


@dataclass(frozen=True)
class ValidationOutcome:
    """A file result plus the export text a caller may want to persist."""

    result: FileResult
    export_text: str | None = None


def export_name(input_name: str) -> str:
    """Derive the export artifact name ('Song.gp5' -> 'Song.atex')."""
    return PurePath(input_name).stem + EXPORT_SUFFIX


class RoundTripValidator:
    """Drive one score through the backend and classify the outcome.

    Performs no filesystem I/O; persisting failing artifacts is left to
    the caller.
    """

    def __init__(self, backend: ScoreBackend):
        """Initialize the validator.

        Args:
            backend: Score backend providing load, export and re-import
        """
        self.backend = backend

    def validate(self, data: bytes, input_name: str) -> ValidationOutcome:
        """Validate one score.

        Load and export problems give ``error``, a raising re-import gives
        ``failed`` with normalized diagnostics, anything else ``passed``.

        Args:
            data: Raw score file bytes
            input_name: File name used in the result

        Returns:
            ValidationOutcome with the final FileResult and the export text
        """
        atex = export_name(input_name)

        try:
            score = self.backend.load_score(data)
            text = self.backend.export_text(score)
        except Exception as e:
            logger.debug(f"Could not load or export {input_name}: {e}")
            return ValidationOutcome(FileResult.errored(input_name, atex, _describe(e)))

        try:
            self.backend.import_text(text)
        except BackendError as e:
            logger.debug(f"Backend failure re-importing {input_name}: {e}")
            return ValidationOutcome(FileResult.errored(input_name, atex, _describe(e)), text)
        except Exception as e:
            diagnostics = extract_diagnostics(e)
            logger.debug(f"{input_name}: re-import raised {diagnostics.error_count} diagnostics")
            return ValidationOutcome(FileResult.failed(input_name, atex, diagnostics), text)

        return ValidationOutcome(FileResult.passed(input_name, atex))


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__
