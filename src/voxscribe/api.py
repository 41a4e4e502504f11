"""HTTP API for voxscribe."""

from __future__ import annotations

from threading import Lock

from fastapi import FastAPI

from voxscribe import __version__
from voxscribe.config import load_config
from voxscribe.core import run_transcription
from voxscribe.models import HealthResponse, JobResult, TranscriptionRequest
from voxscribe.status import LoggingStatusSink


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(
        title="voxscribe",
        version=__version__,
        description="Audio-to-text transcription jobs over an external whisper CLI.",
    )
    config = load_config()
    status = LoggingStatusSink()
    job_lock = Lock()

    @app.get("/health", response_model=HealthResponse, tags=["system"])
    def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__, env=config.env)

    # Jobs are serialized; failures come back as ok=false with HTTP 200.
    @app.post(
        "/v1/transcribe",
        response_model=JobResult,
        response_model_exclude_none=True,
        response_model_by_alias=True,
        tags=["transcription"],
    )
    def transcribe(request: TranscriptionRequest) -> JobResult:
        with job_lock:
            return run_transcription(request, status=status, config=config)

    return app


app = create_app()
