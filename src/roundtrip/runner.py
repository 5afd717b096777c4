"""Batch validation over a directory of score files."""

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from common.constants import FAILED_EXPORT_DIRNAME, FAILED_INPUT_DIRNAME
from common.logger import get_logger

from .models import BatchReport, FileResult, FileStatus
from .validator import RoundTripValidator, export_name

logger = get_logger(__name__)

# Called after each file with (index, total, result); index is 1-based
ProgressObserver = Callable[[int, int, FileResult], None]


def utc_timestamp(now: datetime | None = None) -> str:
    """Format a UTC timestamp as '2025-01-31T12:00:00.000Z'."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def list_score_files(input_dir: Path, extensions: tuple[str, ...]) -> list[str]:
    """List score file names in a directory, sorted by name.

    Args:
        input_dir: Directory to scan (not recursive)
        extensions: Lower-cased suffixes to accept, e.g. ('.gp5',)

    Returns:
        File names whose suffix matches case-insensitively

    Raises:
        OSError: If the directory cannot be listed
    """
    return sorted(
        entry.name
        for entry in input_dir.iterdir()
        if entry.is_file() and entry.suffix.lower() in extensions
    )


class ArtifactStore:
    """Filesystem access for a validation run.

    Inputs are read from ``input_dir``; failing inputs are copied to
    ``<out_dir>/failed_gp5`` and their export text saved to
    ``<out_dir>/fail_atex``.
    """

    def __init__(self, input_dir: Path, out_dir: Path):
        self.input_dir = input_dir
        self.out_dir = out_dir
        self.failed_input_dir = out_dir / FAILED_INPUT_DIRNAME
        self.failed_export_dir = out_dir / FAILED_EXPORT_DIRNAME

    def read_input(self, name: str) -> bytes:
        return (self.input_dir / name).read_bytes()

    def save_failed_input(self, name: str, data: bytes) -> Path:
        self.failed_input_dir.mkdir(parents=True, exist_ok=True)
        path = self.failed_input_dir / name
        path.write_bytes(data)
        return path

    def save_failed_export(self, name: str, text: str) -> Path:
        self.failed_export_dir.mkdir(parents=True, exist_ok=True)
        path = self.failed_export_dir / name
        path.write_text(text, encoding="utf-8")
        return path


class BatchRunner:
    """Validate files one after another and collect a BatchReport.

    A failure or error on one file never stops the batch.
    """

    def __init__(
        self,
        validator: RoundTripValidator,
        store: ArtifactStore,
        dry_run: bool = False,
        observer: ProgressObserver | None = None,
    ):
        """Initialize the runner.

        Args:
            validator: Validator used for every file
            store: Reads inputs and persists failing artifacts
            dry_run: Compute results without writing failing artifacts
            observer: Optional per-file progress callback
        """
        self.validator = validator
        self.store = store
        self.dry_run = dry_run
        self.observer = observer

    def run(self, names: list[str], generated_at: str | None = None) -> BatchReport:
        """Validate files in the given order.

        Args:
            names: File names relative to the store's input directory
            generated_at: Report timestamp (default: now, UTC)

        Returns:
            BatchReport with one result per name
        """
        results: list[FileResult] = []
        total = len(names)

        for index, name in enumerate(names, start=1):
            result = self.process_file(name)
            results.append(result)
            if self.observer is not None:
                self.observer(index, total, result)

        return BatchReport(
            generated_at=generated_at or utc_timestamp(),
            input_dir=str(self.store.input_dir),
            out_dir=str(self.store.out_dir),
            total_files=total,
            results=tuple(results),
        )

    def process_file(self, name: str) -> FileResult:
        """Validate one file and persist its artifacts if it failed."""
        logger.debug(f"Processing: {name}")

        try:
            data = self.store.read_input(name)
        except OSError as e:
            logger.debug(f"Could not read {name}: {e}")
            return FileResult.errored(name, export_name(name), e.strerror or str(e))
        except Exception as e:
            logger.error(f"Unexpected error reading {name}: {e}")
            return FileResult.errored(name, export_name(name), str(e) or type(e).__name__)

        try:
            outcome = self.validator.validate(data, name)
        except Exception as e:
            logger.error(f"Unexpected error validating {name}: {e}")
            return FileResult.errored(name, export_name(name), str(e) or type(e).__name__)

        if outcome.result.status == FileStatus.FAILED and not self.dry_run:
            self._persist_failure(name, data, outcome.result.atex, outcome.export_text)

        return outcome.result

    def _persist_failure(self, name: str, data: bytes, atex: str, text: str | None) -> None:
        # Artifact problems are logged; the file keeps its failed status
        try:
            self.store.save_failed_input(name, data)
        except Exception as e:
            logger.error(f"Failed to copy failed score {name}: {e}")

        if text is None:
            return
        try:
            self.store.save_failed_export(atex, text)
        except Exception as e:
            logger.error(f"Failed to save export text {atex}: {e}")
