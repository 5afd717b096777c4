"""Score backend driving the alphaTab JavaScript library through Node.js.

alphaTab has no Python port, so each operation runs the bundled
``alphatab_bridge.js`` script in a fresh Node.js process and reads one JSON
object back from stdout.
"""

import json
import os
import subprocess
from pathlib import Path
from typing import Any

from common.env import env
from common.logger import get_logger

from .base import (
    BackendError,
    BackendNotFoundError,
    Score,
    ScoreBackend,
    ScoreLoadError,
    TextImportError,
)

logger = get_logger(__name__)

BRIDGE_SCRIPT = Path(__file__).parent / "alphatab_bridge.js"

# Exit codes of the bridge script
EXIT_OK = 0
EXIT_MISSING_LIBRARY = 2
EXIT_IMPORT_DIAGNOSTICS = 3
EXIT_LOAD_FAILED = 4


class AlphaTabBackend(ScoreBackend):
    """Load, export to alphaTex and re-import scores with alphaTab."""

    def __init__(self, node_binary: str | None = None, module: str | None = None):
        """Initialize the backend.

        Args:
            node_binary: Node.js executable (default: NODE_BINARY or 'node')
            module: alphaTab module specifier (default: ALPHATAB_MODULE)
        """
        self.node_binary = node_binary or env.node_binary()
        self.module = module or env.alphatab_module()

    def check_available(self) -> str:
        result = self._run("ping")
        return f"{result.get('name', self.module)} {result.get('version', 'unknown')}"

    def load_score(self, data: bytes) -> Score:
        result = self._run("load", data)
        return Score(
            data=data,
            title=result.get("title"),
            artist=result.get("artist"),
            track_count=result.get("trackCount") or 0,
        )

    def export_text(self, score: Score) -> str:
        result = self._run("export", score.data)
        text = result.get("text")
        if not isinstance(text, str):
            raise BackendError("alphaTab bridge returned no export text")
        return text

    def import_text(self, text: str) -> Score:
        payload = text.encode("utf-8")
        result = self._run("import", payload)
        return Score(
            data=payload,
            title=result.get("title"),
            artist=result.get("artist"),
            track_count=result.get("trackCount") or 0,
        )

    def _run(self, command: str, payload: bytes = b"") -> dict[str, Any]:
        """Run one bridge command and decode its JSON answer.

        Args:
            command: Bridge command (ping, load, export, import)
            payload: Bytes written to the bridge's stdin

        Returns:
            Decoded JSON object for a successful command

        Raises:
            BackendNotFoundError: If Node.js or alphaTab is missing
            ScoreLoadError: If alphaTab could not load or export the score
            TextImportError: If re-importing the text failed
            BackendError: For any other bridge failure
        """
        cmd = [self.node_binary, str(BRIDGE_SCRIPT), command]
        logger.debug(f"Running alphaTab bridge: {command} ({len(payload)} bytes)")

        try:
            proc = subprocess.run(
                cmd,
                input=payload,
                capture_output=True,
                check=False,
                env={**os.environ, "ALPHATAB_MODULE": self.module},
            )
        except FileNotFoundError as e:
            raise BackendNotFoundError(
                f"Node.js executable '{self.node_binary}' not found. "
                "Install Node.js or set NODE_BINARY."
            ) from e
        except OSError as e:
            raise BackendError(f"Failed to start alphaTab bridge: {e}") from e

        stderr = proc.stderr.decode("utf-8", errors="replace").strip()
        try:
            data = json.loads(proc.stdout.decode("utf-8") or "{}")
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise BackendError(
                f"alphaTab bridge produced invalid output for '{command}' "
                f"(exit {proc.returncode}): {stderr or e}"
            ) from e

        if not isinstance(data, dict):
            raise BackendError(f"alphaTab bridge returned {type(data).__name__}, expected an object")

        error = data.get("error") or {}

        if proc.returncode == EXIT_OK:
            return data
        if proc.returncode == EXIT_MISSING_LIBRARY:
            raise BackendNotFoundError(error.get("message") or f"Missing dependency: {self.module}")
        if proc.returncode == EXIT_IMPORT_DIAGNOSTICS:
            raise TextImportError.from_payload(error)
        if proc.returncode == EXIT_LOAD_FAILED:
            raise ScoreLoadError(error.get("message") or "alphaTab could not load the score")

        raise BackendError(
            f"alphaTab bridge failed for '{command}' (exit {proc.returncode}): "
            f"{error.get('message') or stderr or 'no output'}"
        )
