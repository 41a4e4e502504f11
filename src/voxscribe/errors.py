"""Error types raised inside a transcription job."""

from __future__ import annotations

from pathlib import Path


class VoxscribeError(Exception):
    """Base class for expected, user facing job errors."""


class InputNotFoundError(VoxscribeError):
    """Request audio path is empty or missing on disk."""


class ConversionError(VoxscribeError):
    """ffmpeg is missing, exited non-zero, or produced no audio."""


class InvocationExhaustedError(VoxscribeError):
    """No invocation variant and no stdout fallback produced a transcript."""

    def __init__(self, message: str, log_path: Path) -> None:
        super().__init__(message)
        self.log_path = log_path
