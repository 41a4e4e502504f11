"""Transcription job orchestration.

A job converts the input to 16 kHz mono WAV when needed, then tries each
whisper invocation variant until a transcript can be found on disk. When
every variant comes up empty the last captured stdout is saved instead, and
failing that the captured output is written to a diagnostic log. Every job
ends as a `JobResult`; nothing raised inside a job escapes to the caller.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from voxscribe.audio import PreparedAudio, prepare_audio
from voxscribe.config import AppConfig, load_config
from voxscribe.diagnostics import write_diagnostic_log
from voxscribe.errors import InputNotFoundError, InvocationExhaustedError, VoxscribeError
from voxscribe.invoke import InvocationRunner, common_flags, resolve_transcriber_binary
from voxscribe.io import FileSystem, LocalFileSystem, canonical_output_path
from voxscribe.models import JobResult, TranscriptionRequest
from voxscribe.resolve import DiscoveredOutput, OutputResolver
from voxscribe.runner import ProcessRunner, SubprocessRunner
from voxscribe.status import StatusSink, emit_status

logger = logging.getLogger(__name__)

STDOUT_FALLBACK_NOTE = "Saved from stdout fallback."


class JobState(str, Enum):
    INIT = "init"
    PREPARING = "preparing"
    INVOKING = "invoking"
    RESOLVING = "resolving"
    EXHAUSTED_FALLBACK = "exhausted_fallback"
    CLEANUP = "cleanup"
    DONE = "done"
    FAILED = "failed"


class TranscriptionJob:
    """One request's run through the prepare/invoke/resolve state machine."""

    def __init__(
        self,
        request: TranscriptionRequest,
        *,
        runner: ProcessRunner,
        fs: FileSystem,
        config: AppConfig,
        status: StatusSink | None = None,
    ) -> None:
        self.request = request
        self.runner = runner
        self.fs = fs
        self.config = config
        self.status = status
        self.audio_path = Path(request.audio_path)
        self.output_path = canonical_output_path(self.audio_path)
        self.state = JobState.INIT

    def run(self) -> JobResult:
        prepared: PreparedAudio | None = None
        try:
            if not self.fs.exists(self.audio_path):
                raise InputNotFoundError(f"Audio path is empty or not found: {self.audio_path}")
            self._transition(JobState.PREPARING)
            prepared = prepare_audio(
                self.audio_path,
                runner=self.runner,
                fs=self.fs,
                converter_binary=self.config.converter_binary,
                timeout_sec=self.config.conversion_timeout_sec,
                status=self.status,
            )
            discovered = self._invoke_and_resolve(prepared)
        except (VoxscribeError, OSError) as exc:
            return self._fail(exc, prepared)
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Unexpected error in job for %s", self.audio_path)
            return self._fail(exc, prepared)

        self._cleanup(prepared)
        self._transition(JobState.DONE)
        if discovered.provenance == "stdout-fallback":
            emit_status(self.status, "Done (saved from stdout).")
            return JobResult.success(
                str(self.output_path), discovered.provenance, note=STDOUT_FALLBACK_NOTE
            )
        emit_status(self.status, "Done.")
        return JobResult.success(str(self.output_path), discovered.provenance)

    def _invoke_and_resolve(self, prepared: PreparedAudio) -> DiscoveredOutput:
        invoker = InvocationRunner(
            runner=self.runner,
            binary=resolve_transcriber_binary(
                self.request.transcriber_binary_path, self.config.transcriber_binary
            ),
            common=common_flags(self.request),
            timeout_sec=self.config.attempt_timeout_sec,
            status=self.status,
        )
        resolver = OutputResolver(self.output_path, self.fs)
        resolver.snapshot()

        self._transition(JobState.INVOKING)
        for outcome in invoker.attempts(prepared.path, self.output_path):
            self._transition(JobState.RESOLVING)
            discovered = resolver.resolve_attempt()
            if discovered is not None:
                logger.info(
                    "Transcript for %s found via %s after variant %s",
                    self.audio_path,
                    discovered.provenance,
                    outcome.variant.name,
                )
                return discovered
            self._transition(JobState.INVOKING)

        self._transition(JobState.EXHAUSTED_FALLBACK)
        discovered = resolver.resolve_stdout_fallback(invoker.last_stdout)
        if discovered is not None:
            return discovered

        log_path = write_diagnostic_log(
            self.output_path, invoker.last_stdout, invoker.last_stderr, fs=self.fs
        )
        raise InvocationExhaustedError(
            f"Transcription finished but no .txt file was found. Saved logs to {log_path}",
            log_path,
        )

    def _cleanup(self, prepared: PreparedAudio) -> None:
        self._transition(JobState.CLEANUP)
        if not prepared.is_temporary:
            return
        try:
            if self.fs.exists(prepared.path):
                self.fs.remove(prepared.path)
        except OSError as exc:
            logger.warning("Could not remove temporary audio %s: %s", prepared.path, exc)

    def _fail(self, exc: Exception, prepared: PreparedAudio | None) -> JobResult:
        if prepared is not None:
            self._cleanup(prepared)
        self._transition(JobState.FAILED)
        message = str(exc).strip() or type(exc).__name__
        logger.error("Job for %s failed: %s", self.audio_path, message)
        return JobResult.failure(message)

    def _transition(self, state: JobState) -> None:
        logger.debug("Job %s: %s -> %s", self.audio_path.name, self.state.value, state.value)
        self.state = state


def run_transcription(
    request: TranscriptionRequest,
    *,
    runner: ProcessRunner | None = None,
    fs: FileSystem | None = None,
    status: StatusSink | None = None,
    config: AppConfig | None = None,
) -> JobResult:
    """Run a single transcription job and classify its outcome."""
    job = TranscriptionJob(
        request,
        runner=runner or SubprocessRunner(),
        fs=fs or LocalFileSystem(),
        config=config or load_config(),
        status=status,
    )
    return job.run()
