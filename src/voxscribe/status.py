"""One-way progress channels for transcription jobs."""

from __future__ import annotations

import logging
import sys
from typing import Protocol, TextIO

logger = logging.getLogger(__name__)


class StatusSink(Protocol):
    """Receives progress text; never acknowledges."""

    def emit(self, text: str) -> None:
        """Publish one progress message."""


class NullStatusSink:
    """Discard every message."""

    def emit(self, text: str) -> None:
        return None


class LoggingStatusSink:
    """Forward progress text to a logger at INFO level."""

    def __init__(self, target: logging.Logger | None = None) -> None:
        self._logger = target or logging.getLogger("voxscribe.status")

    def emit(self, text: str) -> None:
        message = text.rstrip()
        if message:
            self._logger.info("%s", message)


class StreamStatusSink:
    """Write progress text to a stream, stderr by default."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stderr

    def emit(self, text: str) -> None:
        message = text.rstrip("\n")
        if not message:
            return
        self._stream.write(message + "\n")
        self._stream.flush()


def emit_status(sink: StatusSink | None, text: str) -> None:
    """Fire-and-forget emission; sink failures never reach the job."""
    if sink is None:
        return
    try:
        sink.emit(text)
    except Exception:  # pylint: disable=broad-except
        logger.debug("Status sink rejected message", exc_info=True)
