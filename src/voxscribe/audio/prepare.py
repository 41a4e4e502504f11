"""Normalize input audio to 16 kHz mono WAV for the transcriber."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from voxscribe.errors import ConversionError, InputNotFoundError
from voxscribe.io.files import FileSystem
from voxscribe.io.paths import is_wav, temp_wav_path
from voxscribe.runner.process import ProcessRunner
from voxscribe.status import StatusSink, emit_status

logger = logging.getLogger(__name__)

TARGET_SAMPLE_RATE_HZ = 16_000
TARGET_CHANNELS = 1
_STDERR_TAIL_LINES = 10


@dataclass(frozen=True)
class PreparedAudio:
    """WAV path handed to the transcriber.

    `is_temporary` marks a converted file owned by the job; an original
    input is never deleted.
    """

    path: Path
    is_temporary: bool


def default_converter_binary() -> str:
    return "ffmpeg.exe" if sys.platform == "win32" else "ffmpeg"


def converter_args(input_path: Path, output_path: Path) -> list[str]:
    return [
        "-y",
        "-i",
        str(input_path),
        "-ar",
        str(TARGET_SAMPLE_RATE_HZ),
        "-ac",
        str(TARGET_CHANNELS),
        "-f",
        "wav",
        str(output_path),
    ]


def prepare_audio(
    audio_path: str | Path,
    *,
    runner: ProcessRunner,
    fs: FileSystem,
    converter_binary: str | None = None,
    timeout_sec: float | None = 600,
    status: StatusSink | None = None,
) -> PreparedAudio:
    """Return a WAV path for `audio_path`, converting with ffmpeg when needed."""
    source = Path(audio_path)
    if not fs.exists(source):
        raise InputNotFoundError(f"Audio path is empty or not found: {source}")

    if is_wav(source):
        logger.debug("Input %s is already WAV; skipping conversion", source)
        return PreparedAudio(path=source, is_temporary=False)

    target = temp_wav_path(source)
    binary = converter_binary or default_converter_binary()
    emit_status(status, "Converting to WAV (ffmpeg)…")
    logger.info("Converting %s -> %s with %s", source, target, binary)
    output = runner.run(
        binary,
        converter_args(source, target),
        timeout_sec=timeout_sec,
        status=status,
    )

    if not output.launched:
        _discard_partial(target, fs)
        raise ConversionError(
            "ffmpeg not found. Please install ffmpeg and make sure it's on PATH. "
            f"({output.launch_error})"
        )
    if output.returncode != 0 or not fs.is_non_empty(target):
        _discard_partial(target, fs)
        code = "timeout" if output.timed_out else output.returncode
        tail = "\n".join(output.stderr.rstrip().splitlines()[-_STDERR_TAIL_LINES:])
        raise ConversionError(f"ffmpeg failed (code {code}). {tail}".rstrip())

    return PreparedAudio(path=target, is_temporary=True)


def _discard_partial(path: Path, fs: FileSystem) -> None:
    if not fs.exists(path):
        return
    try:
        fs.remove(path)
    except OSError as exc:
        logger.warning("Could not remove partial conversion %s: %s", path, exc)
