"""External process execution that never raises on failure exit codes."""

from __future__ import annotations

import logging
import os
import signal
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from threading import Thread
from typing import IO, Protocol

from voxscribe.status import StatusSink, emit_status

logger = logging.getLogger(__name__)

_POSIX = os.name == "posix"
# Upper bound on draining pipes still held open by orphaned grandchildren.
_READER_GRACE_SEC = 5.0


@dataclass(frozen=True)
class ProcessOutput:
    """Captured result of one external process run.

    `returncode` is `None` when the process could not be launched or was
    killed after its timeout.
    """

    stdout: str
    stderr: str
    returncode: int | None = None
    timed_out: bool = False
    launch_error: str | None = None

    @property
    def launched(self) -> bool:
        return self.launch_error is None


class ProcessRunner(Protocol):
    """Runs an executable and returns captured output unconditionally."""

    def run(
        self,
        executable: str,
        args: Sequence[str],
        *,
        timeout_sec: float | None,
        status: StatusSink | None = None,
    ) -> ProcessOutput:
        """Execute `executable` with `args`."""


class SubprocessRunner:
    """`subprocess`-backed runner streaming output to a status sink."""

    def run(
        self,
        executable: str,
        args: Sequence[str],
        *,
        timeout_sec: float | None,
        status: StatusSink | None = None,
    ) -> ProcessOutput:
        command = [executable, *args]
        logger.debug("Running %s", command)
        try:
            proc = subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                start_new_session=_POSIX,
            )
        except (OSError, ValueError) as exc:
            logger.warning("Could not launch %s: %s", executable, exc)
            return ProcessOutput(stdout="", stderr="", launch_error=str(exc))

        stdout_chunks: list[str] = []
        stderr_chunks: list[str] = []
        readers = [
            Thread(target=_drain, args=(proc.stdout, stdout_chunks, status), daemon=True),
            Thread(target=_drain, args=(proc.stderr, stderr_chunks, status), daemon=True),
        ]
        for reader in readers:
            reader.start()

        timed_out = False
        try:
            returncode: int | None = proc.wait(timeout=timeout_sec)
        except subprocess.TimeoutExpired:
            logger.warning("%s timed out after %ss; killing", executable, timeout_sec)
            _kill_process_tree(proc)
            timed_out = True
            returncode = None

        for reader in readers:
            reader.join(timeout=_READER_GRACE_SEC)
            if reader.is_alive():
                logger.warning("Output of %s still open after exit; abandoning reader", executable)

        output = ProcessOutput(
            stdout="".join(stdout_chunks),
            stderr="".join(stderr_chunks),
            returncode=returncode,
            timed_out=timed_out,
        )
        logger.debug(
            "%s finished (returncode=%s, stdout=%d chars, stderr=%d chars)",
            executable,
            output.returncode,
            len(output.stdout),
            len(output.stderr),
        )
        return output


def _kill_process_tree(proc: subprocess.Popen[str]) -> None:
    if _POSIX:
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
    else:
        proc.kill()
    proc.wait()


def _drain(stream: IO[str] | None, chunks: list[str], status: StatusSink | None) -> None:
    if stream is None:
        return
    with stream:
        for line in stream:
            chunks.append(line)
            emit_status(status, line)
