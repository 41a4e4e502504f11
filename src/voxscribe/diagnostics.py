"""Persist captured whisper output when no transcript could be found."""

from __future__ import annotations

from pathlib import Path

from voxscribe.io.files import FileSystem
from voxscribe.io.paths import diagnostic_log_path

_EMPTY = "(empty)"


def format_diagnostics(stdout: str, stderr: str) -> str:
    return (
        "--- STDOUT ---\n"
        f"{stdout or _EMPTY}\n\n"
        "--- STDERR ---\n"
        f"{stderr or _EMPTY}\n"
    )


def write_diagnostic_log(output_path: Path, stdout: str, stderr: str, *, fs: FileSystem) -> Path:
    """Write `<base>.log.txt` beside the canonical output and return its path."""
    log_path = diagnostic_log_path(output_path)
    fs.write_text(log_path, format_diagnostics(stdout, stderr))
    return log_path
