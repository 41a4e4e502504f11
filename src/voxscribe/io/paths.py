"""Filesystem naming contract for job artifacts."""

from __future__ import annotations

import os
from pathlib import Path

TEXT_SUFFIX = ".txt"
WAV_SUFFIX = ".wav"
_TEMP_MARKER = "__tmp"
_LOG_SUFFIX = ".log.txt"


def canonical_output_path(audio_path: str | Path) -> Path:
    """Return `<dir>/<base>.txt` for `<dir>/<base>.<ext>`."""
    path = Path(audio_path)
    return path.with_name(f"{path.stem}{TEXT_SUFFIX}")


def temp_wav_path(audio_path: str | Path) -> Path:
    """Return the sibling `<dir>/<base>__tmp.wav` conversion target."""
    path = Path(audio_path)
    return path.with_name(f"{path.stem}{_TEMP_MARKER}{WAV_SUFFIX}")


def diagnostic_log_path(output_path: str | Path) -> Path:
    """Swap the trailing `.txt` of a canonical output path for `.log.txt`."""
    path = Path(output_path)
    stem = path.name[: -len(TEXT_SUFFIX)] if path.name.casefold().endswith(TEXT_SUFFIX) else path.name
    return path.with_name(f"{stem}{_LOG_SUFFIX}")


def is_wav(audio_path: str | Path) -> bool:
    return Path(audio_path).suffix.casefold() == WAV_SUFFIX


def normalize_path(path: str | Path) -> str:
    """Case-folded, normalized form used to compare paths for identity."""
    return os.path.normcase(os.path.normpath(str(path))).casefold()
