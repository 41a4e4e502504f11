"""Ordered whisper CLI argument shapes."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from voxscribe.models import TranscriptionRequest

OutputTarget = Literal["file", "directory", "none"]


@dataclass(frozen=True)
class InvocationVariant:
    """How one variant tells the transcriber where to write its text output."""

    name: str
    output_flag: str | None
    output_target: OutputTarget

    def build_args(self, wav_path: Path, output_path: Path, common: list[str]) -> list[str]:
        args = ["-f", str(wav_path), "-otxt"]
        if self.output_flag is not None:
            target = output_path if self.output_target == "file" else output_path.parent
            args.extend([self.output_flag, str(target)])
        return [*args, *common]


# Most common whisper.cpp convention first.
VARIANTS: tuple[InvocationVariant, ...] = (
    InvocationVariant(name="output-file-short", output_flag="-of", output_target="file"),
    InvocationVariant(name="output-file-long", output_flag="--output-file", output_target="file"),
    InvocationVariant(name="output-dir", output_flag="-o", output_target="directory"),
    InvocationVariant(name="implicit", output_flag=None, output_target="none"),
)


def common_flags(request: TranscriptionRequest) -> list[str]:
    """Flags shared by every variant, appended after the output directive."""
    flags: list[str] = []
    if request.language:
        flags.extend(["-l", request.language])
    if request.no_timestamps:
        flags.append("--no-timestamps")
    if request.model_path and Path(request.model_path).exists():
        flags.extend(["-m", request.model_path])
    return flags


def default_transcriber_binary() -> str:
    return "whisper-cli" if sys.platform == "win32" else "whisper"


def resolve_transcriber_binary(requested: str | None, configured: str | None = None) -> str:
    """Pick the request's binary if it exists, else config, else the platform default."""
    if requested and Path(requested).exists():
        return requested
    if configured:
        return configured
    return default_transcriber_binary()
