"""Run the transcriber once per invocation variant."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from voxscribe.invoke.variants import VARIANTS, InvocationVariant
from voxscribe.runner.process import ProcessRunner
from voxscribe.status import StatusSink, emit_status

logger = logging.getLogger(__name__)

DEFAULT_ATTEMPT_TIMEOUT_SEC = 10 * 60


@dataclass(frozen=True)
class AttemptOutcome:
    """Captured output of one attempt; the exit code is deliberately absent."""

    variant: InvocationVariant
    stdout: str
    stderr: str


class InvocationRunner:
    """Try each variant in order, remembering the latest captured output.

    Many whisper builds exit non-zero after writing a transcript, so every
    call counts as completed and the caller inspects the filesystem instead.
    """

    def __init__(
        self,
        *,
        runner: ProcessRunner,
        binary: str,
        common: Sequence[str] = (),
        variants: Sequence[InvocationVariant] = VARIANTS,
        timeout_sec: float = DEFAULT_ATTEMPT_TIMEOUT_SEC,
        status: StatusSink | None = None,
    ) -> None:
        self.runner = runner
        self.binary = binary
        self.common = list(common)
        self.variants = tuple(variants)
        self.timeout_sec = timeout_sec
        self.status = status
        self.last_stdout = ""
        self.last_stderr = ""

    def attempts(self, wav_path: Path, output_path: Path) -> Iterator[AttemptOutcome]:
        total = len(self.variants)
        for index, variant in enumerate(self.variants, start=1):
            emit_status(self.status, f"Running Whisper (attempt {index}/{total})…")
            args = variant.build_args(wav_path, output_path, self.common)
            logger.info("Attempt %d/%d (%s): %s %s", index, total, variant.name, self.binary, args)
            output = self.runner.run(
                self.binary,
                args,
                timeout_sec=self.timeout_sec,
                status=self.status,
            )
            if output.timed_out:
                logger.warning("Attempt %d (%s) timed out", index, variant.name)
            elif output.returncode not in (0, None):
                logger.debug("Attempt %d exited with %s; ignoring", index, output.returncode)
            stderr = output.stderr
            if output.launch_error is not None:
                stderr += f"Could not launch {self.binary}: {output.launch_error}\n"
            self.last_stdout = output.stdout
            self.last_stderr = stderr
            yield AttemptOutcome(variant=variant, stdout=output.stdout, stderr=stderr)
